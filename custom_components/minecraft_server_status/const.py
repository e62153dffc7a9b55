# custom_components/minecraft_server_status/const.py
"""Constants for the Minecraft Server Status integration."""

# --- Integration Domain ---
DOMAIN = "minecraft_server_status"

# --- Supported Platforms ---
PLATFORMS = ["binary_sensor"]

# --- Configuration Keys (used in config_flow.py and config_entry) ---
CONF_NAME = "name"
CONF_HOST = "host"
CONF_PORT = "port"
CONF_SERVER_TYPE = "server_type"
CONF_UPDATE_INTERVAL = "update_interval"  # Milliseconds

# --- Server Types ---
SERVER_TYPE_JAVA = "java"
SERVER_TYPE_BEDROCK = "bedrock"

# --- Default Values ---
DEFAULT_NAME = "Minecraft Server"
DEFAULT_PORT = 25565
DEFAULT_BEDROCK_PORT = 19132
MIN_UPDATE_INTERVAL_MS = 60 * 1000  # Upstream API caches results for a minute
DEFAULT_UPDATE_INTERVAL_MS = MIN_UPDATE_INTERVAL_MS

# --- Upstream Status API ---
API_BASE_URL = "https://api.mcsrvstat.us"
API_VERSION = "3"
API_BEDROCK_PREFIX = "bedrock"
DEFAULT_REQUEST_TIMEOUT = 30  # seconds

# --- Device Information ---
MANUFACTURER = "oof. Studio, LLC"
MODEL = "OOF-MCSERVER"
SOFTWARE_VERSION = "1.0.0"
USER_AGENT = f"minecraft-server-status/{SOFTWARE_VERSION}"

# --- Attribute Keys ---
ATTR_PLAYERS_ONLINE = "players_online"
ATTR_SERVER_ADDRESS = "server_address"
ATTR_SERVER_TYPE = "server_type"

# --- Entity Keys ---
KEY_OCCUPANCY = "occupancy"
KEY_STATUS = "status"
