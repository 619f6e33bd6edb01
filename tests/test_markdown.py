from recipe_import.app.services.url_parsing.extractors.markdown import (
    PLACEHOLDER,
    parse_recipe_from_markdown,
)

MARKDOWN = """Title: Best Banana Bread | Food Blog
# Best Banana Bread

Some intro text about bananas.

## Ingredients
- 3 ripe bananas
- 1/3 cup melted butter
* 1 tsp baking soda
2. ok

## Instructions
1. Preheat the oven to 350 degrees.
2. **Mash** the bananas in a mixing bowl.
[Print recipe](https://example.com/print)
Short.
"""


def test_parse_markdown_sections():
    recipe = parse_recipe_from_markdown(MARKDOWN, "https://example.com/banana-bread")
    assert recipe is not None
    assert recipe.name == "Best Banana Bread"
    assert recipe.ingredients == ["3 ripe bananas", "1/3 cup melted butter", "1 tsp baking soda"]
    assert recipe.instructions == [
        "Preheat the oven to 350 degrees.",
        "Mash the bananas in a mixing bowl.",
    ]


def test_bold_section_headings_and_host_title():
    markdown = "Intro\n**Ingredients**\n- 200 g spaghetti\n**Directions**\n- Boil the pasta until al dente.\n"
    recipe = parse_recipe_from_markdown(markdown, "https://pasta.example.com/carbonara")
    assert recipe.name == "pasta.example.com"
    assert recipe.ingredients == ["200 g spaghetti"]
    assert recipe.instructions == ["Boil the pasta until al dente."]


def test_missing_section_gets_placeholder():
    markdown = "# Salad\n## Ingredients\n- 1 head lettuce\n"
    recipe = parse_recipe_from_markdown(markdown, "https://example.com/salad")
    assert recipe.ingredients == ["1 head lettuce"]
    assert recipe.instructions == [PLACEHOLDER]


def test_lists_are_capped():
    lines = ["## Ingredients"] + [f"- ingredient number {i}" for i in range(80)]
    recipe = parse_recipe_from_markdown("\n".join(lines), "https://example.com/big", max_items=50)
    assert len(recipe.ingredients) == 50
    assert recipe.ingredients[0] == "ingredient number 0"


def test_no_sections_is_absent():
    assert parse_recipe_from_markdown("# Just a post\n\nNo recipe here.", "https://example.com") is None
