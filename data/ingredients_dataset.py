"""Built-in ingredient pool seeded by `init_db` when the table is empty.

Macros are per 100g (or 100ml for beverages). Values come from TACO for
Brazilian staples and USDA for the few imported items; substitutes without a
published composition are marked as estimated.
"""

LIGHT_SLOTS = ["breakfast", "morning_snack", "afternoon_snack", "supper"]
MAIN_SLOTS = ["lunch", "dinner"]

INGREDIENTS_DATA = [
    # Carbs
    {"key": "french_bread", "names": {"en": "French Bread Roll", "pt": "Pão francês"}, "category": "carb", "kcal": 300, "protein": 8.0, "carbs": 58.6, "fat": 3.1, "fiber": 2.3, "default_portion": 50, "triggers_intolerances": ["gluten"], "meal_types": LIGHT_SLOTS},
    {"key": "whole_wheat_bread", "names": {"en": "Whole Wheat Bread", "pt": "Pão integral"}, "category": "carb", "kcal": 253, "protein": 9.4, "carbs": 49.9, "fat": 3.7, "fiber": 6.9, "default_portion": 50, "triggers_intolerances": ["gluten"], "meal_types": LIGHT_SLOTS},
    {"key": "gluten_free_bread", "names": {"en": "Gluten-Free Bread", "pt": "Pão sem glúten"}, "category": "carb", "kcal": 240, "protein": 8.0, "carbs": 45.0, "fat": 3.0, "fiber": 7.0, "default_portion": 50, "safe_for_intolerances": ["gluten"], "replaces": ["french_bread", "whole_wheat_bread"], "meal_types": LIGHT_SLOTS, "macro_source": "estimated"},
    {"key": "tapioca", "names": {"en": "Tapioca Crepe", "pt": "Tapioca"}, "category": "carb", "kcal": 240, "protein": 0.0, "carbs": 60.0, "fat": 0.0, "fiber": 0.5, "default_portion": 60, "safe_for_intolerances": ["gluten", "lactose"], "meal_types": LIGHT_SLOTS},
    {"key": "corn_couscous", "names": {"en": "Corn Couscous", "pt": "Cuscuz de milho"}, "category": "carb", "kcal": 113, "protein": 2.2, "carbs": 25.3, "fat": 0.7, "fiber": 2.1, "default_portion": 100, "safe_for_intolerances": ["gluten"], "triggers_intolerances": ["corn"], "meal_types": LIGHT_SLOTS},
    {"key": "cheese_bread", "names": {"en": "Cheese Bread", "pt": "Pão de queijo"}, "category": "carb", "kcal": 363, "protein": 5.1, "carbs": 34.2, "fat": 24.6, "fiber": 0.6, "default_portion": 40, "safe_for_intolerances": ["gluten"], "triggers_intolerances": ["lactose", "egg"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy"},
    {"key": "rolled_oats", "names": {"en": "Rolled Oats", "pt": "Aveia em flocos"}, "category": "carb", "kcal": 394, "protein": 13.9, "carbs": 66.6, "fat": 8.5, "fiber": 9.1, "default_portion": 30, "triggers_intolerances": ["gluten"], "meal_types": LIGHT_SLOTS},
    {"key": "pancakes", "names": {"en": "Pancakes", "pt": "Panquecas"}, "category": "carb", "kcal": 227, "protein": 6.4, "carbs": 28.3, "fat": 9.7, "fiber": 0.9, "default_portion": 80, "triggers_intolerances": ["gluten", "egg", "lactose"], "meal_types": ["breakfast"], "animal_origin": "egg", "macro_source": "usda"},
    {"key": "sweet_potato", "names": {"en": "Boiled Sweet Potato", "pt": "Batata-doce cozida"}, "category": "carb", "kcal": 77, "protein": 0.6, "carbs": 18.4, "fat": 0.1, "fiber": 2.2, "default_portion": 120, "safe_for_intolerances": ["gluten"]},
    {"key": "white_rice", "names": {"en": "White Rice", "pt": "Arroz branco"}, "category": "carb", "kcal": 128, "protein": 2.5, "carbs": 28.1, "fat": 0.2, "fiber": 1.6, "default_portion": 150, "safe_for_intolerances": ["gluten"], "meal_types": MAIN_SLOTS, "staple": "rice"},
    {"key": "brown_rice", "names": {"en": "Brown Rice", "pt": "Arroz integral"}, "category": "carb", "kcal": 124, "protein": 2.6, "carbs": 25.8, "fat": 1.0, "fiber": 2.7, "default_portion": 150, "safe_for_intolerances": ["gluten"], "meal_types": MAIN_SLOTS, "staple": "rice"},
    {"key": "pasta", "names": {"en": "Pasta", "pt": "Macarrão"}, "category": "carb", "kcal": 158, "protein": 5.8, "carbs": 30.9, "fat": 0.9, "fiber": 1.8, "default_portion": 150, "triggers_intolerances": ["gluten"], "meal_types": MAIN_SLOTS},
    {"key": "gluten_free_pasta", "names": {"en": "Rice Pasta", "pt": "Macarrão de arroz"}, "category": "carb", "kcal": 150, "protein": 3.0, "carbs": 32.0, "fat": 1.0, "fiber": 1.5, "default_portion": 150, "safe_for_intolerances": ["gluten"], "replaces": ["pasta"], "meal_types": MAIN_SLOTS, "macro_source": "estimated"},
    {"key": "boiled_cassava", "names": {"en": "Boiled Cassava", "pt": "Mandioca cozida"}, "category": "carb", "kcal": 125, "protein": 0.6, "carbs": 30.1, "fat": 0.3, "fiber": 1.6, "default_portion": 120, "safe_for_intolerances": ["gluten"], "meal_types": MAIN_SLOTS},

    # Proteins
    {"key": "scrambled_eggs", "names": {"en": "Scrambled Eggs", "pt": "Ovos mexidos"}, "category": "protein", "kcal": 143, "protein": 13.0, "carbs": 0.7, "fat": 9.5, "fiber": 0.0, "default_portion": 100, "triggers_intolerances": ["egg"], "animal_origin": "egg"},
    {"key": "tofu_scramble", "names": {"en": "Tofu Scramble", "pt": "Tofu mexido"}, "category": "protein", "kcal": 144, "protein": 17.3, "carbs": 2.8, "fat": 8.7, "fiber": 2.3, "default_portion": 100, "safe_for_intolerances": ["egg", "lactose"], "triggers_intolerances": ["soy"], "replaces": ["scrambled_eggs"], "macro_source": "usda"},
    {"key": "turkey_breast", "names": {"en": "Turkey Breast Slices", "pt": "Peito de peru"}, "category": "protein", "kcal": 109, "protein": 21.0, "carbs": 2.0, "fat": 2.0, "fiber": 0.0, "default_portion": 30, "triggers_intolerances": ["sulfite"], "meal_types": LIGHT_SLOTS, "animal_origin": "poultry", "macro_source": "tbca"},
    {"key": "grilled_chicken_breast", "names": {"en": "Grilled Chicken Breast", "pt": "Peito de frango grelhado"}, "category": "protein", "kcal": 159, "protein": 32.0, "carbs": 0.0, "fat": 3.2, "fiber": 0.0, "default_portion": 120, "meal_types": MAIN_SLOTS, "animal_origin": "poultry"},
    {"key": "grilled_beef_steak", "names": {"en": "Grilled Beef Steak", "pt": "Bife grelhado"}, "category": "protein", "kcal": 219, "protein": 35.9, "carbs": 0.0, "fat": 7.3, "fiber": 0.0, "default_portion": 120, "meal_types": MAIN_SLOTS, "animal_origin": "meat"},
    {"key": "grilled_tilapia", "names": {"en": "Grilled Tilapia", "pt": "Tilápia grelhada"}, "category": "protein", "kcal": 128, "protein": 26.2, "carbs": 0.0, "fat": 2.7, "fiber": 0.0, "default_portion": 120, "triggers_intolerances": ["fish"], "meal_types": MAIN_SLOTS, "animal_origin": "fish"},
    {"key": "sauteed_shrimp", "names": {"en": "Sautéed Shrimp", "pt": "Camarão refogado"}, "category": "protein", "kcal": 99, "protein": 24.0, "carbs": 0.2, "fat": 0.3, "fiber": 0.0, "default_portion": 100, "triggers_intolerances": ["seafood"], "meal_types": MAIN_SLOTS, "animal_origin": "seafood", "macro_source": "usda"},
    {"key": "black_beans", "names": {"en": "Black Beans", "pt": "Feijão preto"}, "category": "protein", "kcal": 77, "protein": 4.5, "carbs": 14.0, "fat": 0.5, "fiber": 8.4, "default_portion": 100, "triggers_intolerances": ["fodmap"], "meal_types": MAIN_SLOTS, "staple": "beans"},
    {"key": "carioca_beans", "names": {"en": "Carioca Beans", "pt": "Feijão carioca"}, "category": "protein", "kcal": 76, "protein": 4.8, "carbs": 13.6, "fat": 0.5, "fiber": 8.5, "default_portion": 100, "triggers_intolerances": ["fodmap"], "meal_types": MAIN_SLOTS, "staple": "beans"},
    {"key": "lentils", "names": {"en": "Cooked Lentils", "pt": "Lentilha cozida"}, "category": "protein", "kcal": 93, "protein": 6.3, "carbs": 16.3, "fat": 0.5, "fiber": 7.9, "default_portion": 100, "triggers_intolerances": ["fodmap"], "meal_types": MAIN_SLOTS},

    # Dairy
    {"key": "minas_cheese", "names": {"en": "Minas Cheese", "pt": "Queijo minas frescal"}, "category": "dairy", "kcal": 264, "protein": 17.4, "carbs": 3.2, "fat": 20.2, "fiber": 0.0, "default_portion": 30, "triggers_intolerances": ["lactose"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy"},
    {"key": "lactose_free_cheese", "names": {"en": "Lactose-Free Cheese", "pt": "Queijo sem lactose"}, "category": "dairy", "kcal": 280, "protein": 20.0, "carbs": 2.0, "fat": 21.0, "fiber": 0.0, "default_portion": 30, "safe_for_intolerances": ["lactose"], "replaces": ["minas_cheese"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy", "macro_source": "estimated"},
    {"key": "plain_yogurt", "names": {"en": "Plain Yogurt", "pt": "Iogurte natural"}, "category": "dairy", "kcal": 51, "protein": 4.1, "carbs": 1.9, "fat": 3.0, "fiber": 0.0, "default_portion": 170, "triggers_intolerances": ["lactose"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy"},
    {"key": "lactose_free_yogurt", "names": {"en": "Lactose-Free Yogurt", "pt": "Iogurte sem lactose"}, "category": "dairy", "kcal": 60, "protein": 3.5, "carbs": 6.0, "fat": 2.5, "fiber": 0.0, "default_portion": 170, "safe_for_intolerances": ["lactose"], "replaces": ["plain_yogurt"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy", "macro_source": "estimated"},
    {"key": "cream_cheese", "names": {"en": "Cream Cheese", "pt": "Requeijão"}, "category": "dairy", "kcal": 257, "protein": 9.6, "carbs": 2.4, "fat": 23.4, "fiber": 0.0, "default_portion": 20, "triggers_intolerances": ["lactose"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy"},

    # Fruits
    {"key": "banana", "names": {"en": "Banana", "pt": "Banana prata"}, "category": "fruit", "kcal": 98, "protein": 1.3, "carbs": 26.0, "fat": 0.1, "fiber": 2.0, "default_portion": 100},
    {"key": "papaya", "names": {"en": "Papaya", "pt": "Mamão papaia"}, "category": "fruit", "kcal": 40, "protein": 0.5, "carbs": 10.4, "fat": 0.1, "fiber": 1.0, "default_portion": 150},
    {"key": "apple", "names": {"en": "Apple", "pt": "Maçã"}, "category": "fruit", "kcal": 56, "protein": 0.3, "carbs": 15.2, "fat": 0.0, "fiber": 1.3, "default_portion": 130, "triggers_intolerances": ["fructose", "sorbitol"]},
    {"key": "orange", "names": {"en": "Orange", "pt": "Laranja pera"}, "category": "fruit", "kcal": 37, "protein": 1.0, "carbs": 8.9, "fat": 0.1, "fiber": 0.8, "default_portion": 150},
    {"key": "mango", "names": {"en": "Mango", "pt": "Manga"}, "category": "fruit", "kcal": 64, "protein": 0.4, "carbs": 16.7, "fat": 0.3, "fiber": 1.6, "default_portion": 120, "triggers_intolerances": ["fructose"]},
    {"key": "strawberries", "names": {"en": "Strawberries", "pt": "Morangos"}, "category": "fruit", "kcal": 30, "protein": 0.9, "carbs": 6.8, "fat": 0.3, "fiber": 1.7, "default_portion": 100},

    # Vegetables
    {"key": "lettuce_salad", "names": {"en": "Lettuce Salad", "pt": "Salada de alface"}, "category": "vegetable", "kcal": 11, "protein": 1.3, "carbs": 1.7, "fat": 0.2, "fiber": 1.8, "default_portion": 50, "meal_types": MAIN_SLOTS},
    {"key": "tomato_salad", "names": {"en": "Tomato Salad", "pt": "Salada de tomate"}, "category": "vegetable", "kcal": 15, "protein": 1.1, "carbs": 3.1, "fat": 0.2, "fiber": 1.2, "default_portion": 60, "triggers_intolerances": ["histamine"], "meal_types": MAIN_SLOTS},
    {"key": "steamed_broccoli", "names": {"en": "Steamed Broccoli", "pt": "Brócolis no vapor"}, "category": "vegetable", "kcal": 25, "protein": 2.1, "carbs": 4.4, "fat": 0.5, "fiber": 3.4, "default_portion": 80, "meal_types": MAIN_SLOTS},
    {"key": "cooked_carrot", "names": {"en": "Cooked Carrot", "pt": "Cenoura cozida"}, "category": "vegetable", "kcal": 30, "protein": 0.8, "carbs": 6.7, "fat": 0.2, "fiber": 2.6, "default_portion": 60, "meal_types": MAIN_SLOTS},
    {"key": "sauteed_collard_greens", "names": {"en": "Sautéed Collard Greens", "pt": "Couve refogada"}, "category": "vegetable", "kcal": 90, "protein": 1.7, "carbs": 8.7, "fat": 6.6, "fiber": 5.7, "default_portion": 50, "meal_types": MAIN_SLOTS},
    {"key": "zucchini", "names": {"en": "Sautéed Zucchini", "pt": "Abobrinha refogada"}, "category": "vegetable", "kcal": 15, "protein": 1.1, "carbs": 3.0, "fat": 0.2, "fiber": 1.6, "default_portion": 80, "meal_types": MAIN_SLOTS},

    # Fats and condiments
    {"key": "olive_oil", "names": {"en": "Olive Oil", "pt": "Azeite de oliva"}, "category": "fat", "kcal": 884, "protein": 0.0, "carbs": 0.0, "fat": 100.0, "fiber": 0.0, "default_portion": 10, "unit": "ml", "meal_types": MAIN_SLOTS},
    {"key": "butter", "names": {"en": "Butter", "pt": "Manteiga"}, "category": "fat", "kcal": 726, "protein": 0.4, "carbs": 0.1, "fat": 82.4, "fiber": 0.0, "default_portion": 10, "triggers_intolerances": ["lactose"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy"},
    {"key": "peanut_butter", "names": {"en": "Peanut Butter", "pt": "Pasta de amendoim"}, "category": "fat", "kcal": 588, "protein": 25.1, "carbs": 20.0, "fat": 50.0, "fiber": 6.0, "default_portion": 20, "triggers_intolerances": ["peanut"], "meal_types": LIGHT_SLOTS, "macro_source": "usda"},
    {"key": "honey", "names": {"en": "Honey", "pt": "Mel"}, "category": "condiment", "kcal": 309, "protein": 0.0, "carbs": 84.0, "fat": 0.0, "fiber": 0.0, "default_portion": 15, "triggers_intolerances": ["fructose"], "meal_types": LIGHT_SLOTS, "animal_origin": "honey"},

    # Beverages
    {"key": "black_coffee", "names": {"en": "Black Coffee", "pt": "Café preto"}, "category": "beverage", "kcal": 9, "protein": 0.7, "carbs": 1.5, "fat": 0.1, "fiber": 0.0, "default_portion": 100, "unit": "ml", "triggers_intolerances": ["caffeine"], "meal_types": LIGHT_SLOTS},
    {"key": "coffee_with_milk", "names": {"en": "Coffee with Milk", "pt": "Café com leite"}, "category": "beverage", "kcal": 47, "protein": 2.5, "carbs": 4.0, "fat": 2.3, "fiber": 0.0, "default_portion": 200, "unit": "ml", "triggers_intolerances": ["lactose", "caffeine"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy"},
    {"key": "lactose_free_coffee_with_milk", "names": {"en": "Coffee with Lactose-Free Milk", "pt": "Café com leite sem lactose"}, "category": "beverage", "kcal": 45, "protein": 2.6, "carbs": 3.8, "fat": 2.1, "fiber": 0.0, "default_portion": 200, "unit": "ml", "safe_for_intolerances": ["lactose"], "triggers_intolerances": ["caffeine"], "replaces": ["coffee_with_milk"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy", "macro_source": "estimated"},
    {"key": "whole_milk", "names": {"en": "Whole Milk", "pt": "Leite integral"}, "category": "beverage", "kcal": 61, "protein": 2.9, "carbs": 4.3, "fat": 3.2, "fiber": 0.0, "default_portion": 200, "unit": "ml", "triggers_intolerances": ["lactose"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy"},
    {"key": "lactose_free_milk", "names": {"en": "Lactose-Free Milk", "pt": "Leite sem lactose"}, "category": "beverage", "kcal": 61, "protein": 3.2, "carbs": 4.6, "fat": 3.5, "fiber": 0.0, "default_portion": 200, "unit": "ml", "safe_for_intolerances": ["lactose"], "replaces": ["whole_milk"], "meal_types": LIGHT_SLOTS, "animal_origin": "dairy", "macro_source": "estimated"},
    {"key": "soy_beverage", "names": {"en": "Soy Beverage", "pt": "Bebida de soja"}, "category": "beverage", "kcal": 54, "protein": 3.3, "carbs": 6.3, "fat": 1.8, "fiber": 0.6, "default_portion": 200, "unit": "ml", "safe_for_intolerances": ["lactose"], "triggers_intolerances": ["soy"], "replaces": ["whole_milk"], "meal_types": LIGHT_SLOTS, "macro_source": "usda"},
    {"key": "orange_juice", "names": {"en": "Fresh Orange Juice", "pt": "Suco de laranja natural"}, "category": "beverage", "kcal": 36, "protein": 0.7, "carbs": 8.2, "fat": 0.1, "fiber": 0.4, "default_portion": 200, "unit": "ml"},
    {"key": "coconut_water", "names": {"en": "Coconut Water", "pt": "Água de coco"}, "category": "beverage", "kcal": 22, "protein": 0.0, "carbs": 5.3, "fat": 0.0, "fiber": 0.1, "default_portion": 200, "unit": "ml"},
    {"key": "mate_tea", "names": {"en": "Iced Mate Tea", "pt": "Chá mate gelado"}, "category": "beverage", "kcal": 3, "protein": 0.0, "carbs": 0.6, "fat": 0.0, "fiber": 0.0, "default_portion": 200, "unit": "ml", "triggers_intolerances": ["caffeine"]},
]
