"""Built-in cultural rule set seeded by `init_db` when the table is empty.

Country "*" holds the global default for each meal type. A country's
`fallback_country` is shared by all of its rules and is followed when the
country has no rule for the requested meal type.
"""

CULTURAL_RULES_DATA = [
    # Brazil
    {
        "country_code": "BR", "meal_type": "breakfast",
        "required_components": ["carb", "beverage"],
        "optional_components": ["fruit", "dairy"],
        "forbidden_components": ["vegetable"],
        "typical_beverages": ["coffee_with_milk", "black_coffee", "whole_milk", "orange_juice"],
        "max_prep_time": 15,
        "structure": "Bread, tapioca or couscous with coffee; fruit or cheese on the side",
        "required_pairings": [{"if_key": "french_bread", "then_key": "butter", "probability": 0.5}],
    },
    {
        "country_code": "BR", "meal_type": "morning_snack",
        "required_components": ["fruit"],
        "optional_components": ["dairy"],
        "forbidden_components": ["vegetable", "protein"],
        "max_prep_time": 5,
        "structure": "A piece of fruit, optionally with yogurt",
    },
    {
        "country_code": "BR", "meal_type": "lunch",
        "required_components": ["carb", "protein", "vegetable"],
        "optional_components": ["beverage", "fat"],
        "forbidden_components": ["dairy"],
        "typical_beverages": ["orange_juice", "coconut_water"],
        "forbidden_beverages": ["coffee_with_milk", "whole_milk", "black_coffee"],
        "max_prep_time": 45,
        "structure": "Rice and beans with a protein and salad",
        "required_pairings": [
            {"if_key": "white_rice", "then_key": "black_beans", "probability": 0.9},
            {"if_key": "brown_rice", "then_key": "carioca_beans", "probability": 0.7},
        ],
        "forbidden_pairs": [["pasta", "black_beans"], ["pasta", "carioca_beans"], ["pasta", "white_rice"]],
    },
    {
        "country_code": "BR", "meal_type": "afternoon_snack",
        "required_components": ["carb", "beverage"],
        "optional_components": ["fruit", "dairy"],
        "forbidden_components": ["vegetable"],
        "typical_beverages": ["black_coffee", "coffee_with_milk", "orange_juice"],
        "max_prep_time": 10,
        "structure": "Light snack with coffee or juice",
    },
    {
        "country_code": "BR", "meal_type": "dinner",
        "required_components": ["carb", "protein", "vegetable"],
        "optional_components": ["beverage"],
        "forbidden_components": ["dairy"],
        "typical_beverages": ["orange_juice", "coconut_water"],
        "forbidden_beverages": ["coffee_with_milk", "whole_milk", "black_coffee"],
        "max_prep_time": 40,
        "structure": "Lighter version of lunch",
        "required_pairings": [{"if_key": "white_rice", "then_key": "black_beans", "probability": 0.6}],
        "forbidden_pairs": [["pasta", "black_beans"], ["pasta", "carioca_beans"]],
    },
    {
        "country_code": "BR", "meal_type": "supper",
        "required_components": ["fruit"],
        "optional_components": ["dairy", "beverage"],
        "forbidden_components": ["protein", "vegetable"],
        "typical_beverages": ["whole_milk"],
        "forbidden_beverages": ["black_coffee", "coffee_with_milk", "mate_tea"],
        "max_prep_time": 5,
        "structure": "Small fruit or dairy before bed",
    },

    # Portugal: breakfast and lunch of its own, Brazilian rules otherwise
    {
        "country_code": "PT", "meal_type": "breakfast",
        "required_components": ["carb", "beverage"],
        "optional_components": ["dairy", "fruit"],
        "forbidden_components": ["vegetable"],
        "typical_beverages": ["black_coffee", "whole_milk", "orange_juice"],
        "fallback_country": "BR",
        "max_prep_time": 10,
        "structure": "Bread roll with butter or cheese and coffee",
        "required_pairings": [{"if_key": "french_bread", "then_key": "butter", "probability": 0.7}],
    },
    {
        "country_code": "PT", "meal_type": "lunch",
        "required_components": ["protein", "carb", "vegetable"],
        "optional_components": ["fat"],
        "forbidden_components": ["dairy"],
        "typical_beverages": ["orange_juice"],
        "fallback_country": "BR",
        "max_prep_time": 45,
        "structure": "Fish or meat with potatoes or rice and greens",
        "forbidden_pairs": [["black_beans", "grilled_tilapia"]],
    },

    # Angola follows Portugal, which follows Brazil
    {
        "country_code": "AO", "meal_type": "breakfast",
        "required_components": ["carb", "beverage"],
        "optional_components": ["fruit"],
        "typical_beverages": ["black_coffee", "whole_milk"],
        "fallback_country": "PT",
        "structure": "Bread or sweet potato with coffee",
    },

    # United States: breakfast only, global defaults otherwise
    {
        "country_code": "US", "meal_type": "breakfast",
        "required_components": ["carb", "protein", "beverage"],
        "optional_components": ["fruit", "fat"],
        "typical_beverages": ["black_coffee", "orange_juice", "whole_milk"],
        "max_prep_time": 20,
        "structure": "Pancakes or toast with eggs and coffee",
    },

    # Global defaults
    {"country_code": "*", "meal_type": "breakfast", "required_components": ["carb", "beverage"], "optional_components": ["fruit"], "structure": "Generic breakfast"},
    {"country_code": "*", "meal_type": "morning_snack", "required_components": ["fruit"], "structure": "Generic snack"},
    {"country_code": "*", "meal_type": "lunch", "required_components": ["carb", "protein", "vegetable"], "optional_components": ["beverage"], "structure": "Generic plate"},
    {"country_code": "*", "meal_type": "afternoon_snack", "required_components": ["fruit"], "optional_components": ["dairy"], "structure": "Generic snack"},
    {"country_code": "*", "meal_type": "dinner", "required_components": ["carb", "protein", "vegetable"], "structure": "Generic plate"},
    {"country_code": "*", "meal_type": "supper", "required_components": ["fruit"], "structure": "Generic light meal"},
]
