# Default document
DEFAULT_CONFIG_FILENAME = "model.default.yaml"
ENV_MODEL_DEFAULT_CONFIG = "DB_MODEL_DEFAULT_CONFIG"

# Components
COMPONENT_MODEL = "model"
COMPONENT_SYNC = "sync"
COMPONENT_POOL = "pool"
COMPONENT_TRANSACTION = "transaction"
COMPONENT_RETRY = "retry"

# Document keys
KEY_HOST = "host"
KEY_PORT = "port"
KEY_USERNAME = "username"
KEY_PASSWORD = "password"
KEY_DATABASE = "database"
KEY_DIALECT = "dialect"
KEY_PROTOCOL = "protocol"
KEY_LOGGING = "logging"
KEY_OMIT_NULL = "omit-null"
KEY_OPERATORS_ALIASES = "operators-aliases"
KEY_SYNC_FORCE = "force"
KEY_SYNC_ALTER = "alter"
KEY_POOL_MAX = "max"
KEY_POOL_MIN = "min"
KEY_POOL_IDLE = "idle"
KEY_POOL_ACQUIRE = "acquire"
KEY_POOL_EVICT = "evict"
KEY_TRANSACTION_TYPE = "type"
KEY_TRANSACTION_ISOLATION_LEVEL = "isolation-level"
KEY_RETRY_MAX = "max"

# Dialect -> SQLAlchemy async driver
DIALECT_ASYNC_DRIVERS = {
    "mysql": "mysql+aiomysql",
    "mariadb": "mariadb+aiomysql",
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
    "mssql": "mssql+aioodbc",
}
UNPOOLED_DIALECTS = ("sqlite",)

# Connectivity check
AUTHENTICATE_QUERY = "SELECT 1"

# Engine-level isolation levels accepted per SQLAlchemy dialect
DIALECT_ISOLATION_LEVELS = {
    "sqlite": ("READ UNCOMMITTED", "SERIALIZABLE", "AUTOCOMMIT"),
    "mysql": ("READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE", "AUTOCOMMIT"),
    "mariadb": ("READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE", "AUTOCOMMIT"),
    "postgresql": ("READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE", "AUTOCOMMIT"),
    "mssql": ("READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE", "SNAPSHOT", "AUTOCOMMIT"),
}
