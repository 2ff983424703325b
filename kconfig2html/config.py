"""Generator settings: built-in defaults plus optional template files."""

import importlib.util
import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import TemplateError


def get_default_config() -> Dict[str, Any]:
    """Default configuration for HTML generation."""
    return {
        # Page <title> and banner heading
        "title": "NuttX Configuration Options",
        "banner": "NuttX Configuration Variables",
        "background": "backgd.gif",

        # "Last Updated" line under the banner
        "include_date": True,
        "date_format": "%B %d, %Y",

        # Kconfig tree layout
        "kconfig_name": "Kconfig",
        "apps_token": "$APPSDIR",
        "apps_dir": "../apps",

        # Reader and parser limits
        "line_size": 1024,
        "max_levels": 100,
        "max_dependencies": 100,

        # Render entries that have no prompt
        "show_internal": False,
    }


def _load_python(path: Path) -> Dict[str, Any]:
    spec = importlib.util.spec_from_file_location("kconfig2html_template", path)
    if spec is None or spec.loader is None:
        raise TemplateError("cannot import template", str(path))
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except OSError:
        raise
    except Exception as e:
        raise TemplateError(f"template failed to load: {type(e).__name__}: {e}", str(path))

    if hasattr(module, 'CONFIG'):
        return module.CONFIG
    elif hasattr(module, 'config'):
        return module.config
    else:
        raise TemplateError("Template file must define CONFIG or config dictionary", str(path))


def load_config_from_file(config_path: str) -> Dict[str, Any]:
    """Load template settings from a Python, YAML or JSON file."""
    path = Path(config_path)
    try:
        if path.suffix == '.py':
            data = _load_python(path)
        elif path.suffix in ('.yaml', '.yml'):
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        elif path.suffix == '.json':
            with open(path, 'r') as f:
                data = json.load(f)
        else:
            raise TemplateError("unsupported template format (expected .py, .yaml, .yml or .json)", str(path))
    except OSError as e:
        raise TemplateError(f"open failed: {e.strerror or e}", str(path))
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise TemplateError(f"parse failed: {e}", str(path))

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TemplateError("template must contain a mapping of settings", str(path))
    return data


def build_config(template: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Defaults, then template values, then explicit overrides."""
    config = get_default_config()
    if template:
        config.update(load_config_from_file(template))
    if overrides:
        config.update({k: v for k, v in overrides.items() if v is not None})
    return config
