"""check-connection Utils"""
from utils.logger     import get_logger, set_level, log
from utils.validators import validate_host, validate_port, validate_timeout_ms, is_ip
from utils.constants  import ProbeStatus, DEFAULT_TIMEOUT_MS, EXIT_OK, EXIT_FAILURE
from utils.config     import CheckConfig, ConfigError, load_config
__all__ = ["get_logger", "set_level", "log",
           "validate_host", "validate_port", "validate_timeout_ms", "is_ip",
           "ProbeStatus", "DEFAULT_TIMEOUT_MS", "EXIT_OK", "EXIT_FAILURE",
           "CheckConfig", "ConfigError", "load_config"]
