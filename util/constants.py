class InternalURIs:
    HEALTH = "/healthz"
    DOCS = "/"
    QUOTE = "/quote"
    JOKE = "/joke"
    URL = "/{namespace}"
    COUNT = URL + "/count"
    IMAGE = URL + "/image"
    IMAGE_WITH_PATH = IMAGE + "/{path:path}"


class Headers:
    CACHE_CONTROL = "Cache-Control"
    NO_STORE = "no-store"
