"""payment_engine.infra — configuration and logging setup."""

from payment_engine.infra.config import DEFAULT_CONFIG as DEFAULT_CONFIG
from payment_engine.infra.config import EngineConfig as EngineConfig
from payment_engine.infra.config import EngineSettings as EngineSettings
from payment_engine.infra.config import load_config as load_config
from payment_engine.infra.logging_config import setup_logging as setup_logging
