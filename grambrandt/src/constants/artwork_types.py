# AIC artwork type ids offered in the config modal.
# A complete list can be fetched here https://api.artic.edu/api/v1/artwork-types
ARTWORK_TYPES = [
    {"id": 1, "slug": "painting", "label": "Show paintings"},
    {"id": 2, "slug": "photograph", "label": "Show photographs"},
]

ARTWORK_TYPE_IDS = frozenset(artwork_type["id"] for artwork_type in ARTWORK_TYPES)
