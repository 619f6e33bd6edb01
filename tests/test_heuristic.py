from recipe_import.app.services.url_parsing.extractors.heuristic import scrape_recipe_heuristic


def test_scrape_by_class_selectors():
    html = """
    <html><body>
      <h1>Heuristic Cake</h1>
      <div class="recipe-ingredient">2 cups flour</div>
      <div class="recipe-ingredient">1 cup sugar</div>
      <div class="recipe-ingredient">Save recipe</div>
      <ul>
        <li class="instruction-step">Whisk the flour with the sugar.</li>
        <li class="instruction-step">Bake for 30 minutes.</li>
        <li class="instruction-step">Print</li>
      </ul>
    </body></html>
    """
    recipe = scrape_recipe_heuristic(html, "https://example.com/cake")
    assert recipe.name == "Heuristic Cake"
    assert recipe.ingredients == ["2 cups flour", "1 cup sugar"]
    assert recipe.instructions == ["Whisk the flour with the sugar.", "Bake for 30 minutes."]


def test_scrape_by_lists_and_numbered_paragraphs():
    html = """
    <html><body>
      <nav><ul><li>Home</li><li>About</li></ul></nav>
      <article>
        <ul><li>2 cups flour</li><li>1 cup sugar</li><li>3 eggs</li></ul>
        <p>1. Mix the flour and sugar together well.</p>
        <p>Step 2 Bake for 30 minutes until golden.</p>
        <p>Enjoy this lovely cake with friends.</p>
      </article>
    </body></html>
    """
    recipe = scrape_recipe_heuristic(html, "https://example.com/cake")
    assert recipe.ingredients == ["2 cups flour", "1 cup sugar", "3 eggs"]
    assert recipe.instructions == [
        "1. Mix the flour and sugar together well.",
        "Step 2 Bake for 30 minutes until golden.",
    ]


def test_empty_page_never_returns_none():
    recipe = scrape_recipe_heuristic("<html><body><p>Hello</p></body></html>", "https://example.com/x")
    assert recipe.name == "example.com"
    assert recipe.ingredients == ["See full recipe at: https://example.com/x"]
    assert recipe.instructions == ["See full recipe at: https://example.com/x"]


def test_title_falls_back_to_og_title():
    html = """
    <html><head>
      <meta property="og:title" content="Open Graph Paella">
      <title>Site title</title>
    </head><body></body></html>
    """
    recipe = scrape_recipe_heuristic(html, "https://example.com/paella")
    assert recipe.name == "Open Graph Paella"


def test_lists_are_capped():
    items = "".join(f"<li class='ingredient'>ingredient {i}</li>" for i in range(60))
    recipe = scrape_recipe_heuristic(f"<ul>{items}</ul>", "https://example.com/big", max_items=50)
    assert len(recipe.ingredients) == 50


def test_list_scan_keeps_lists_with_print_items():
    html = "<ul><li>1 cup flour</li><li>2 large eggs</li><li>Print</li></ul>"
    recipe = scrape_recipe_heuristic(html, "https://example.com/x")
    assert recipe.ingredients == ["1 cup flour", "2 large eggs", "Print"]


def test_list_scan_drops_add_to_and_save_items():
    html = (
        "<ul><li>1 cup flour</li><li>2 large eggs</li><li>Save recipe</li>"
        "<li>Add to list</li><li>1 tsp salt</li></ul>"
    )
    recipe = scrape_recipe_heuristic(html, "https://example.com/x")
    assert recipe.ingredients == ["1 cup flour", "2 large eggs", "1 tsp salt"]
