"""Loading of custom lint rules from Python modules.

A custom rule module is a ``.py`` file that defines ``new_rule()``
returning an instance of ``gqlint.validation.Rule``::

    from gqlint.validation import Rule

    class FieldIdSuffix(Rule):
        name = "field-id-suffix"
        description = "ID fields end with 'ID' not 'Id'"

        def check(self, schema):
            ...

    def new_rule():
        return FieldIdSuffix()
"""

import importlib.util
from pathlib import Path

from ..core import get_logger
from ..validation import Rule

logger = get_logger(__name__)

ENTRY_POINT = "new_rule"


class RuleLoadError(Exception):
    """Raised when a custom rule module cannot be loaded."""

    pass


def load_rule_module(path: str | Path) -> Rule:
    """Load a single custom rule module.

    Args:
        path: Path to the module file

    Returns:
        The rule instance returned by the module's ``new_rule()``

    Raises:
        RuleLoadError: If the module cannot be imported or does not provide a rule
    """
    module_path = Path(path)
    module_name = f"gqlint_custom_rules.{module_path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, module_path)
    if spec is None or spec.loader is None:
        raise RuleLoadError(f"Cannot import {module_path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise RuleLoadError(f"Cannot import {module_path}: {e}") from e

    factory = getattr(module, ENTRY_POINT, None)
    if not callable(factory):
        raise RuleLoadError(f"{module_path} does not define {ENTRY_POINT}()")

    try:
        rule = factory()
    except Exception as e:
        raise RuleLoadError(f"{module_path}: {ENTRY_POINT}() failed: {e}") from e
    if not isinstance(rule, Rule):
        raise RuleLoadError(
            f"{module_path}: {ENTRY_POINT}() returned {type(rule).__name__}, "
            "expected a Rule"
        )
    return rule


def load_custom_rules(directory: str | Path) -> list[Rule]:
    """Load every custom rule module in a directory.

    Modules that fail to load are logged and skipped.

    Raises:
        RuleLoadError: If the directory does not exist
    """
    rule_dir = Path(directory)
    if not rule_dir.is_dir():
        raise RuleLoadError(f"Custom rule directory not found: {rule_dir}")

    rules: list[Rule] = []
    for module_path in sorted(rule_dir.glob("*.py")):
        if module_path.name.startswith("_"):
            continue
        try:
            rule = load_rule_module(module_path)
        except RuleLoadError as e:
            logger.warning("Failed to load custom rule", path=str(module_path), error=str(e))
            continue
        logger.info("Loaded custom rule", rule=rule.name, path=str(module_path))
        rules.append(rule)
    return rules
