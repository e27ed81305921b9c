"""
Constantes globales pour GameHub API Proxy.
"""

# ============================================================================
# UPSTREAMS PAR DÉFAUT
# ============================================================================
DEFAULT_STATIC_BASE_URL = "https://raw.githubusercontent.com/gamehublite/gamehub_api/main"
DEFAULT_METADATA_BASE_URL = "https://landscape-api.vgabc.com"
DEFAULT_NEWS_BASE_URL = "https://gamehub-news-aggregator.secureflex.workers.dev"
DEFAULT_HTTP_TIMEOUT = 30.0

# ============================================================================
# CORS
# ============================================================================
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# ============================================================================
# CREDENTIAL INTERCEPTOR
# ============================================================================
DEFAULT_PLACEHOLDER_TOKEN = "fake-token"
DEFAULT_REFRESHER_AUTH_HEADER = "X-Worker-Auth"
DEFAULT_REFRESHER_AUTH_VALUE = ""  # TOKEN_REFRESHER_AUTH
DEFAULT_SECRET_KEY = ""  # GAMEHUB_SECRET_KEY
TOKEN_CACHE_TTL = 14400  # 4 heures
TOKEN_CACHE_SUFFIX = "/token-cached"
SIGNATURE_FIELD = "sign"
TOKEN_FIELD = "token"

# ============================================================================
# FALLBACK PROXY
# ============================================================================
FALLBACK_CACHE_TTL = 300  # 5 minutes
FALLBACK_CACHE_MAX_ENTRIES = 512

# Headers à ne jamais recopier d'une connexion à l'autre
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
}

# ============================================================================
# MANIFESTS
# ============================================================================
TYPE_TO_MANIFEST = {
    1: "/components/box64_manifest",
    2: "/components/drivers_manifest",
    3: "/components/dxvk_manifest",
    4: "/components/vkd3d_manifest",
    5: "/components/games_manifest",
    6: "/components/libraries_manifest",
    7: "/components/steam_manifest",
}

DEFAULT_MANIFEST_PAGE_SIZE = 10
DEFAULT_NEWS_PAGE_SIZE = 4

# ============================================================================
# FINGERPRINT SANITIZATION
# ============================================================================
GENERIC_GPU_VERSION = 0
GENERIC_GPU_DEVICE_NAME = "Generic Device"
GENERIC_GAME_TYPE = 2
GENERIC_GAME_ID = "0"
GENERIC_CLIENT_PARAMS = "5.1.0|0|en|Generic|1920*1080|app|app|generic|||||||||com.app|Generic|generic"
GENERIC_GPU_DRIVER_VERSION = 0

# Champs recopiés tels quels depuis la requête d'origine
PASSTHROUGH_SCRIPT_FIELDS = ("gpu_vendor", "token", "sign", "time")

# Champs de la fiche jeu retirés avant de répondre au client
GAME_DETAIL_STRIPPED_FIELDS = ("recommend_game", "card_line_data")

# ============================================================================
# UPSTREAMS STATIQUES (chemin -> message d'erreur)
# ============================================================================
STATIC_JSON_ROUTES = {
    "/base/getBaseInfo": "Failed to fetch base info",
    "/cloud/game/check_user_timer": "Failed to check timer",
    "/game/getDnsIpPool": "Failed to fetch DNS pool",
}
STEAM_HOST_PATH = "/game/getSteamHost/index"
