import json

from recipe_import.app.services.url_parsing.extractors import schema_org


def test_parse_json_ld_recipe_data():
    data = json.dumps(
        {
            "@context": "https://schema.org",
            "@type": "Recipe",
            "name": "Test Pancakes",
            "recipeIngredient": ["1 cup flour", "1 egg"],
            "recipeInstructions": ["Mix ingredients", "Cook on skillet"],
            "totalTime": "PT20M",
        }
    ).encode("utf-8")

    recipe = schema_org.parse_json_recipe_data(data)
    assert recipe is not None
    assert recipe.name == "Test Pancakes"
    assert recipe.cook_time_minutes == 20
    assert len(recipe.ingredients) == 2
    assert recipe.instructions == ["Mix ingredients", "Cook on skillet"]


def test_type_matching_is_substring_and_case_insensitive():
    recipe = schema_org.parse_json_recipe_any(
        {"@type": ["NewsArticle", "schema:RECIPE"], "name": "Typed Stew"}
    )
    assert recipe is not None
    assert recipe.name == "Typed Stew"


def test_graph_member_is_found():
    data = {
        "@context": "https://schema.org",
        "@graph": [
            {"@type": "WebPage", "name": "Page"},
            {
                "@type": "Recipe",
                "name": "Graph Soup",
                "recipeIngredient": ["1 onion"],
                "recipeInstructions": [{"@type": "HowToStep", "text": "Chop the onion."}],
            },
        ],
    }
    recipe = schema_org.parse_json_recipe_any(data)
    assert recipe.name == "Graph Soup"
    assert recipe.instructions == ["Chop the onion."]


def test_permissive_fallback_and_defaults():
    recipe = schema_org.parse_json_recipe_any(
        {"headline": "Blog Post Chili", "recipeIngredient": ["2 beans"]}
    )
    assert recipe.name == "Blog Post Chili"
    assert recipe.cook_time_minutes == 30
    assert recipe.difficulty == "Medium"
    assert recipe.cuisine == ""
    assert recipe.instructions == [schema_org.INSTRUCTIONS_PLACEHOLDER]


def test_placeholders_when_lists_missing():
    recipe = schema_org.parse_json_recipe_any({"@type": "Recipe"})
    assert recipe.name == "Imported Recipe"
    assert recipe.ingredients == ["Imported from web"]
    assert recipe.instructions == ["See original page for steps"]


def test_field_mapping():
    recipe = schema_org.recipe_from_dict(
        {
            "name": "Pad Thai",
            "recipeCuisine": "Thai",
            "totalTime": "PT1H5M",
            "level": "Hard",
            "ingredients": ["rice noodles", "tamarind"],
            "recipeInstructions": "Soak the noodles, then stir-fry everything.",
            "image": {"@type": "ImageObject", "url": "https://img.example.com/padthai.jpg"},
        },
        "https://example.com/pad-thai",
    )
    assert recipe.cuisine == "Thai"
    assert recipe.cook_time_minutes == 65
    assert recipe.difficulty == "Hard"
    assert recipe.ingredients == ["rice noodles", "tamarind"]
    assert recipe.instructions == ["Soak the noodles, then stir-fry everything."]
    assert recipe.image_name == "https://img.example.com/padthai.jpg"
    assert recipe.source_url == "https://example.com/pad-thai"


def test_unparseable_total_time_keeps_default():
    recipe = schema_org.parse_json_recipe_any({"@type": "Recipe", "totalTime": "45 minutes"})
    assert recipe.cook_time_minutes == 30


def test_non_objects_and_malformed_json_are_absent():
    assert schema_org.parse_json_recipe_data(b"[1, 2, 3]") is None
    assert schema_org.parse_json_recipe_data(b"{not json") is None
    assert schema_org.parse_json_recipe_any({"@type": "Organization", "url": "x"}) is None


def test_extract_from_html_skips_bad_blocks_and_reads_lists():
    html = """
    <html><head>
      <script type="application/ld+json">{ broken json </script>
      <script type="application/ld+json">
        [
          {"@type": "BreadcrumbList", "itemListElement": []},
          {"@type": "Recipe", "name": "Listed Stew", "recipeIngredient": ["1 carrot"]}
        ]
      </script>
    </head><body></body></html>
    """
    recipe = schema_org.extract_recipe_from_json_ld(html, "https://example.com/stew")
    assert recipe is not None
    assert recipe.name == "Listed Stew"
    assert recipe.source_url == "https://example.com/stew"


def test_first_matching_script_wins():
    html = """
    <script type="application/ld+json">{"@type": "Recipe", "name": "First"}</script>
    <script type="application/ld+json">{"@type": "Recipe", "name": "Second"}</script>
    """
    recipe = schema_org.extract_recipe_from_json_ld(html, "https://example.com/r")
    assert recipe.name == "First"


def test_no_json_ld_is_absent():
    assert schema_org.extract_recipe_from_json_ld("<html><body>hi</body></html>", None) is None
