import copy
import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from translate_dir.logger import clear_log_mode_cache, get_logger

logger = get_logger(__name__)

# Translation configuration constants
DEFAULT_MAX_WORKERS = 4  # Concurrent provider requests during translate-all
DEFAULT_SYSTEM_MESSAGE = "You are a professional translator. Return only the translated document."

# Provider configuration constants
BUILTIN_PROVIDER_DISPLAY_NAMES = {
    "openai": "OpenAI",
    "deepseek": "DeepSeek",
    "gemini": "Gemini"
}

API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"

# Environment variable consulted for the Gemini key when config holds the placeholder
GOOGLE_API_KEY_ENV = "GOOGLE_API_KEY"
CONFIG_PATH_ENV = "TRANSLATE_DIR_CONFIG"

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Default prompts
DEFAULT_PROMPTS = {
    "document_translation_prompt": {
        "version": "1.0",
        "description": "Whole-file translation prompt used by the submission pipeline",
        "prompt": """You are a professional translator.

Translate the following document from {source_language_name} ({source_language_code}) to {target_language_name} ({target_language_code}).

CRITICAL REQUIREMENTS:
- Preserve the document structure, line breaks, markup and code blocks exactly
- Do not translate code identifiers, URLs or file paths
- Maintain the original tone and style
- Do not add explanations, comments or markdown fences around the result

Document to translate:
{content}

Return ONLY the translated document."""
    }
}

# Default configuration templates
DEFAULT_CONFIG = {
    "ai_provider": "gemini",
    "gemini": {
        "api_key": API_KEY_PLACEHOLDER,
        "models": ["gemini-2.5-flash"],  # Up to 5 models, first is default
        "timeout": 120,
        "api_url": "https://generativelanguage.googleapis.com/v1beta/models"
    },
    "openai": {
        "api_key": API_KEY_PLACEHOLDER,
        "models": ["gpt-4o-mini", "gpt-4o"],
        "timeout": 120,
        "api_url": "https://api.openai.com/v1/chat/completions"
    },
    "deepseek": {
        "api_key": API_KEY_PLACEHOLDER,
        "models": ["deepseek-chat"],
        "timeout": 120,
        "api_url": "https://api.deepseek.com/chat/completions"
    },
    "translation": {
        "max_workers": DEFAULT_MAX_WORKERS,
        "system_message": DEFAULT_SYSTEM_MESSAGE,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 5500,
    },
    "log_mode": "off"
}


def get_config_file() -> Path:
    """Return the config file path, honouring the TRANSLATE_DIR_CONFIG override."""
    override = os.environ.get(CONFIG_PATH_ENV)
    return Path(override) if override else CONFIG_FILE


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge user values over defaults (dicts only, lists replace)."""
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def create_default_config(config_file: Optional[Path] = None) -> Path:
    """Create the default config.json file."""
    config_file = config_file or get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, 'w', encoding='utf-8') as f:
        json.dump(DEFAULT_CONFIG, f, indent=4, ensure_ascii=False)
    logger.info(f"Created default config file: {config_file}")
    return config_file


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load the configuration, falling back to defaults if the file is missing or corrupt."""
    config_file = config_file or get_config_file()
    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            user_config = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config file {config_file}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)
    except OSError as e:
        logger.error(f"Failed to read config file {config_file}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(user_config, dict):
        logger.warning(f"Config file {config_file} does not hold a JSON object, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug("Configuration loaded from %s", config_file)
    return _merge(DEFAULT_CONFIG, user_config)


def save_config(config: Dict[str, Any], config_file: Optional[Path] = None):
    """Save the configuration to the config file."""
    config_file = config_file or get_config_file()
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
        logger.info("Configuration saved to %s", config_file)
    except OSError as e:
        logger.error(f"Failed to save config to {config_file}: {e}")
        raise

    # log_mode may have changed
    clear_log_mode_cache()


def get_max_workers(config: Dict[str, Any]) -> int:
    """Worker pool size for translate-all; never below one."""
    value = config.get('translation', {}).get('max_workers', DEFAULT_MAX_WORKERS)
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        logger.warning(f"Invalid translation.max_workers value {value!r}, using {DEFAULT_MAX_WORKERS}")
        return DEFAULT_MAX_WORKERS


def load_prompts() -> Dict[str, Any]:
    """Load the prompts from default configuration.

    Note: Prompts are hardcoded in the codebase and are not read from the config file.
    """
    return copy.deepcopy(DEFAULT_PROMPTS)


def get_prompt(prompt_name: str = "document_translation_prompt") -> Dict[str, Any]:
    """Get a specific prompt by name."""
    prompts = load_prompts()
    return prompts.get(prompt_name, prompts["document_translation_prompt"])
