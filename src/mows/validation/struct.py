"""Field-level validation for dataclass instances.

Constraints are attached to dataclass fields through ``metadata``, the way
struct tags annotate fields elsewhere::

    @dataclass
    class User:
        name: str = field(default="", metadata=rules(required, min_length(3)))
        email: str = field(default="", metadata=rules(required, email))

    Validator().struct(User(name="al"))
    # ValidationError: validation failed: User.name: Must be at least 3 characters; ...

Fields whose metadata names a registered rule (``metadata=rules("slug")``)
resolve it through ``Validator.register``.
"""

import dataclasses
from typing import Any

from mows.errors import ConfigurationError, ValidationError
from mows.validation.rules import Rule, required

RULES_KEY = "mows.validate"


def rules(*checks: Rule | str) -> dict[str, tuple[Rule | str, ...]]:
    """Build field metadata declaring validation rules.

    Accepts rule callables and names of rules registered on a ``Validator``.
    """
    return {RULES_KEY: checks}


class Validator:
    """Validates dataclass instances against their field rules.

    One instance lives on each ``Engine`` and is shared read-only by all
    requests once registration is done.
    """

    __slots__ = ("_named",)

    def __init__(self) -> None:
        self._named: dict[str, Rule] = {}

    def register(self, name: str, rule: Rule) -> None:
        """Make *rule* available to fields as ``rules("<name>")``."""
        if not callable(rule):
            msg = f"Validation rule {name!r} must be callable, got {type(rule).__name__}."
            raise ConfigurationError(msg)
        self._named[name] = rule

    def _resolve(self, check: Rule | str) -> Rule:
        if isinstance(check, str):
            try:
                return self._named[check]
            except KeyError:
                msg = f"Unknown validation rule {check!r}. Register it with Validator.register()."
                raise ConfigurationError(msg) from None
        return check

    def errors(self, obj: Any) -> dict[str, list[str]]:
        """Collect rule failures for *obj* as ``{field: [messages]}``."""
        if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
            msg = f"Validator.struct() expects a dataclass instance, got {type(obj).__name__}."
            raise ConfigurationError(msg)

        errors: dict[str, list[str]] = {}
        for f in dataclasses.fields(obj):
            checks = f.metadata.get(RULES_KEY, ())
            if not checks:
                continue
            value = getattr(obj, f.name)
            field_errors: list[str] = []
            for check in checks:
                rule = self._resolve(check)
                error = rule(value)
                if error is not None:
                    field_errors.append(error)
                    # Stop on first error for this field if it's a presence check
                    if rule is required:
                        break
            if field_errors:
                errors[f.name] = field_errors
        return errors

    def struct(self, obj: Any) -> None:
        """Validate *obj*; raise ``ValidationError`` listing every violation."""
        errors = self.errors(obj)
        if errors:
            raise ValidationError(errors, type_name=type(obj).__name__)
