from .ini_config_service import IniConfigService
from .lenient_config import LenientConfig, build_lenient_config

__all__ = ["IniConfigService", "LenientConfig", "build_lenient_config"]
