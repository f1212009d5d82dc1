AIC_ARTIST_PAGE_URL = "https://www.artic.edu/artists/{artist_id}"

# The "..." button on a post opens a modal with these two questions
ASK_ABOUT_URL = "https://www.perplexity.ai/search?s=o&q={query}"
ASK_ABOUT_WORK = 'Tell me about "{title}" by {artist}'
ASK_ABOUT_ARTIST = "Tell me about the artist {artist}"

# Ranges for the made-up engagement numbers shown under each post
LIKES_RANGE = (100, 999)
COMMENTS_RANGE = (10, 99)
SHARES_RANGE = (10, 99)

# Avatar background colors are random dark hues
AVATAR_SATURATION = 60
AVATAR_LIGHTNESS = 30
