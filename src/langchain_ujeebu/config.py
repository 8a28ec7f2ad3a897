import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml
from pydantic import BaseModel, SecretStr
from langchain_ujeebu.article import ExtractionFlags
from langchain_ujeebu.errors import UjeebuConfigError

DEFAULT_BASE_URL: str = "https://api.ujeebu.com/extract"
API_KEY_ENV: str = "UJEEBU_API_KEY"
SIGNUP_URL: str = "https://ujeebu.com/signup"
DEFAULT_TIMEOUT_S: float = 60.0


def resolve_api_key(
    api_key: Optional[Union[str, SecretStr]] = None
) -> SecretStr:
    """
    An explicitly passed key wins over the environment variable.

    Raises:
        UjeebuConfigError: if neither is set.
    """
    if isinstance(api_key, SecretStr):
        api_key = api_key.get_secret_value()
    resolved: Optional[str] = api_key or os.environ.get(API_KEY_ENV)
    if not resolved:
        raise UjeebuConfigError(
            "Ujeebu API key must be provided either through api_key parameter "
            f"or {API_KEY_ENV} environment variable. "
            f"Get your API key at {SIGNUP_URL}"
        )
    return SecretStr(resolved)


# Config file


class LoaderConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    extraction: ExtractionFlags = ExtractionFlags()
    urls: List[str] = []


def load_as_yml(path: Path) -> Dict[str, Any]:
    with path.open("r") as file:
        config: Any = yaml.safe_load(file)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Expected a mapping at the top of {path}.")
    return config


def load_config(path: Optional[Path] = None) -> LoaderConfig:
    if path is None:
        return LoaderConfig()
    return LoaderConfig(**load_as_yml(path))
