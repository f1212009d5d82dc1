DEFAULT_AIC_SEARCH_URL = "https://api.artic.edu/api/v1/artworks/search"
DEFAULT_AIC_USER_AGENT = "grambrandt.com"

# Number of artworks requested from the AIC search endpoint per batch
BATCH_SIZE = 12

# Default artwork type filter applied on first page load (before the user
# changes anything in the config modal). 1 = painting, 2 = photograph.
DEFAULT_ARTWORK_TYPE_IDS: frozenset[int] = frozenset({1})

# Artworks taller than this multiple of their width break the post layout
MAX_HEIGHT_TO_WIDTH_RATIO = 2.5

# Width in pixels requested from the IIIF image service. 843px is AIC's
# recommended size since it is what their own website uses (best CDN hit rate).
IIIF_IMAGE_WIDTH = 843

# Fields to request from the API. Only what the post cards need.
FIELDS = [
    "id",
    "artist_title",
    "artist_id",
    "date_start",
    "date_end",
    "date_display",
    "medium_display",
    "artwork_type_title",
    "place_of_origin",
    "short_description",
    "title",
    "image_id",
    "dimensions_detail",
]

# The AIC search endpoint has no "random" sort, so we sort by a random script score
RANDOM_SORT = [
    {"_script": {"type": "number", "script": "Math.random()", "order": "asc"}}
]
