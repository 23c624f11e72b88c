import copy
import logging
import re
from typing import Any

from app.models.gateway.dto import MappingDto
from app.utils import get_by_path, has_path, set_by_path, unset_by_path

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"{{\s*([\w.\-]+)\s*}}")
_TRUE_VALUES = ("yes", "true", "t", "1")


class MappingService:
    """
    Declarative field mapping. A mapping translates an input document to an output document:

    - `passthrough`: the output starts as a copy of the input.
    - `mapping`: target key (dotted for nesting) to expression. A string expression is a dotted
      path into the input, or a template with `{{ path }}` placeholders. Any other value is
      copied as is. Expressions that resolve to nothing are left out.
    - `cast`: target key to one of `string`, `integer`, `boolean`, `keyCantBeValue`.
    - `unset`: target keys removed from the output.

    The service has no state and no side effects.
    """

    def mapping(self, mapping: MappingDto, data: dict[str, Any]) -> dict[str, Any]:
        output: dict[str, Any] = copy.deepcopy(data) if mapping.passthrough else {}

        for target, expression in mapping.mapping.items():
            found, value = self.__evaluate(expression, data)
            if found:
                set_by_path(output, target, value)

        for target, cast in mapping.cast.items():
            if has_path(output, target):
                self.__cast(output, target, cast)

        for target in mapping.unset:
            unset_by_path(output, target)

        logger.debug(f"Mapped object with mapping {mapping.reference}")
        return output

    @staticmethod
    def __evaluate(expression: Any, data: dict[str, Any]) -> tuple[bool, Any]:
        if not isinstance(expression, str):
            return True, copy.deepcopy(expression)

        placeholders = _PLACEHOLDER.findall(expression)
        if not placeholders:
            return has_path(data, expression), copy.deepcopy(get_by_path(data, expression))

        # A lone placeholder keeps the type of the value it refers to
        single = _PLACEHOLDER.fullmatch(expression.strip())
        if single is not None:
            path = single.group(1)
            return has_path(data, path), copy.deepcopy(get_by_path(data, path))

        def render(match: re.Match[str]) -> str:
            value = get_by_path(data, match.group(1))
            return "" if value is None else str(value)

        return True, _PLACEHOLDER.sub(render, expression)

    @staticmethod
    def __cast(output: dict[str, Any], target: str, cast: str) -> None:
        value = get_by_path(output, target)
        match cast:
            case "string":
                set_by_path(output, target, "" if value is None else str(value))
            case "integer":
                try:
                    set_by_path(output, target, int(value))
                except (TypeError, ValueError):
                    logger.warning(f"Could not cast {target} to integer, value is left unchanged")
            case "boolean":
                if isinstance(value, str):
                    value = value.lower() in _TRUE_VALUES
                set_by_path(output, target, bool(value))
            case "keyCantBeValue":
                if value == target:
                    unset_by_path(output, target)
            case _:
                logger.warning(f"Unknown cast {cast} for {target}")
