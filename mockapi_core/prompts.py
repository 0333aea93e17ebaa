# mockapi_core/prompts.py

"""
Prompts e instrucciones para la generación de mock APIs.
"""

from textwrap import dedent

MOCK_API_SYSTEM_PROMPT = (
    "You are an API design assistant. "
    "Return ONLY raw JSON without any commentary or markdown formatting."
)

MIN_RESULTS = 5

# Campos mínimos que se piden para cada item de `results`
RESULT_FIELDS = {
    "id": "Unique identifier for the item",
    "name": "Name of the item",
    "description": "Description of the item",
    "category": "Category of the item",
    "price": "Price of the item",
}

EXAMPLE_STRUCTURE = dedent(
    """\
    {
      "totalResults": 5,
      "id": 1,
      "templateName": "Product List",
      "templateDescription": "A list of products with details.",
      "totalPages": 1,
      "currentPage": 1,
      "resultsPerPage": 5,
      "results": [
        {
          "id": 1,
          "name": "Product Name",
          "description": "Product description",
          "category": "Product category",
          "price": 0.00,
          "stock": 0,
          "rating": 0.0
        },
        {
          "id": 2,
          "name": "Product Name",
          "description": "Product description",
          "category": "Product category",
          "price": 0.00,
          "stock": 0,
          "rating": 0.0
        }
      ]
    }"""
)


def build_mock_api_prompt(description: str) -> str:
    """
    Construye el prompt de usuario a partir de la descripción libre.

    El prompt pide un objeto con un array `results` de al menos
    `MIN_RESULTS` items, cada uno con los campos de `RESULT_FIELDS`,
    y muestra la estructura de ejemplo (con paginación).
    """
    field_lines = "\n".join(f"- {name}: {hint}" for name, hint in RESULT_FIELDS.items())
    return (
        "Based on the following description, create a comprehensive mock API "
        "specification in JSON format.\n"
        'This value should always be named results: "results":, '
        f"ALWAYS provide a minimum of {MIN_RESULTS} results.\n\n"
        "Each result should include as minimum the following fields:\n"
        f"{field_lines}\n\n"
        f"Description: {description}\n\n"
        "Format should follow this example structure:\n"
        f"{EXAMPLE_STRUCTURE}\n"
    )
