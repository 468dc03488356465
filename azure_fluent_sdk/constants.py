import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# SDK Constants
SDK_NAME = os.getenv("AZURE_FLUENT_SDK_NAME", "azure-fluent-sdk")

# Logger Constants
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv(
    "AZURE_FLUENT_LOG_FORMAT",
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[logger_name]} | {message}",
)

# Sync Adapter Constants
SYNC_UNWRAP_MAX_DEPTH = int(os.getenv("AZURE_FLUENT_SYNC_UNWRAP_MAX_DEPTH", "10000"))
SYNC_LOOP_THREAD_NAME = os.getenv(
    "AZURE_FLUENT_SYNC_LOOP_THREAD_NAME", "azure-fluent-sync-loop"
)

# Resource Manager Constants
DOMAIN_DEFAULT_LOCATION = os.getenv("AZURE_FLUENT_DOMAIN_LOCATION", "global")
