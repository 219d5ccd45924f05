import os
import re
from typing import Any, Dict, List, Optional

import yaml

from dfprop.utils.logging import logger

# ${VAR} or ${env:VAR}, variable name in group 1
ENV_PATTERN = re.compile(r"\$\{(?:env:)?([A-Za-z0-9_]+)\}")

KEY_IMPORTS = "imports"
KEY_ENVIRONMENTS = "environments"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested dicts merge recursively and keep the key order of ``base``; any
    other value (lists included) is replaced by the override.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            if key in result:
                logger.debug("Overriding property", key=key)
            result[key] = value
    return result


def _substitute_env(content: str, path: str) -> str:
    """Replace ``${VAR}`` references with environment values.

    Raises:
        ValueError: If a referenced variable is not set
    """
    substituted: List[str] = []

    def replace_env(match):
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            logger.error("Missing required environment variable", variable=var_name, file=path)
            raise ValueError(f"Missing environment variable: {var_name}")
        substituted.append(var_name)
        return value

    content = ENV_PATTERN.sub(replace_env, content)
    if substituted:
        logger.debug("Environment variables substituted", variables=substituted, file=path)
    return content


def _parse_document(content: str, path: str) -> Dict[str, Any]:
    try:
        data = yaml.load(content, Loader=yaml.BaseLoader) or {}
    except yaml.YAMLError as e:
        logger.error("YAML parsing failed", path=path, error=str(e))
        raise
    if not isinstance(data, dict):
        raise ValueError(f"Property document root must be a mapping: {path}")
    return data


def _merge_imports(
    data: Dict[str, Any], imports: Any, base_dir: str, parent: str, env: Optional[str]
) -> Dict[str, Any]:
    """Merge imported documents over ``data``, later imports winning."""
    if isinstance(imports, str):
        imports = [imports]
    merged = data
    for import_path in imports:
        full_path = import_path if os.path.isabs(import_path) else os.path.join(base_dir, import_path)
        if not os.path.exists(full_path):
            logger.error("Imported property file not found", import_path=import_path, parent=parent)
            raise FileNotFoundError(f"Imported YAML file not found: {full_path}")
        try:
            imported = load_yaml_with_env(full_path, env=env)
        except Exception as e:
            raise ValueError(
                f"Failed to load import '{import_path}' (resolved: {full_path}): {e}"
            ) from e
        merged = _deep_merge(merged, imported)
    logger.debug("Imports merged", parent=parent, count=len(imports))
    return merged


def _apply_environment(
    data: Dict[str, Any], environments: Dict[str, Any], base_dir: str, env: str
) -> Dict[str, Any]:
    """Overlay the ``environments.<env>`` block, then a sibling ``env.<env>.yaml``."""
    if env in environments:
        data = _deep_merge(data, environments[env])
        logger.debug("Applied environment block", env=env)
    else:
        logger.debug(
            "No environment block for env", env=env, available=list(environments.keys())
        )

    env_file_path = os.path.join(base_dir, f"env.{env}.yaml")
    if os.path.exists(env_file_path):
        # env=None: an env file never pulls in further env files
        data = _deep_merge(data, load_yaml_with_env(env_file_path, env=None))
        logger.debug("Applied environment file", env=env, file=env_file_path)
    return data


def load_yaml_with_env(path: str, env: Optional[str] = None) -> Dict[str, Any]:
    """Load a YAML property document.

    Scalars are read with ``yaml.BaseLoader`` so every value stays a string, the
    same as in a dfprop file: ``true``, ``1`` and ``2024-01-01`` arrive as text
    and the property groups decide how to read them.

    Supports:
    - ${VAR_NAME} and ${env:VAR_NAME} substitution
    - 'imports' list of relative paths, merged over the importing file
    - 'environments' overrides based on env param
    - sibling 'env.<env>.yaml' override file

    Args:
        path: Path to YAML file
        env: Environment name (e.g., 'ut', 'prod') to apply overrides

    Returns:
        Parsed dictionary (merged with imports and env overrides)

    Raises:
        FileNotFoundError: If the file or an import does not exist
        ValueError: If an environment variable is missing or the root is not a mapping
        yaml.YAMLError: If YAML parsing fails
    """
    if not os.path.exists(path):
        logger.error("Property file not found", path=path)
        raise FileNotFoundError(f"YAML file not found: {path}")

    abs_path = os.path.abspath(path)
    base_dir = os.path.dirname(abs_path)
    logger.debug("Loading property document", path=abs_path, env=env)

    with open(abs_path, "r", encoding="utf-8") as f:
        content = _substitute_env(f.read(), abs_path)
    data = _parse_document(content, abs_path)

    imports = data.pop(KEY_IMPORTS, None)
    if imports:
        data = _merge_imports(data, imports, base_dir, abs_path, env)

    environments = data.pop(KEY_ENVIRONMENTS, None) or {}
    if env:
        data = _apply_environment(data, environments, base_dir, env)

    logger.debug("Property document loaded", path=abs_path, groups=list(data.keys()))
    return data
