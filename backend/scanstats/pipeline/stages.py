"""
Aggregation stages as plain data.

A pipeline is an ordered tuple of ``Stage`` values. Each stage carries its
operator and the operator's body exactly as MongoDB expects it, so pipelines
stay inspectable (and testable) without a database.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from scanstats.entities.enums import StageOperator

StageBody = Union[Mapping[str, Any], str]


@dataclass(frozen=True)
class Stage:
    """A single aggregation step: ``{operator: body}``."""

    operator: StageOperator
    body: StageBody

    def to_document(self) -> Dict[str, Any]:
        """Render as a MongoDB stage document.

        The body is deep-copied so callers can never mutate catalog entries
        through a rendered pipeline.
        """
        return {self.operator.value: copy.deepcopy(self.body)}


Pipeline = Tuple[Stage, ...]


def field_ref(path: str) -> str:
    """Return the ``$``-prefixed reference to a field path."""
    return f"${path}"


def project(body: Mapping[str, Any]) -> Stage:
    return Stage(StageOperator.PROJECT, body)


def unwind(path: str, preserve_null_and_empty_arrays: bool | None = None) -> Stage:
    """Flatten an array field.

    Without options the short string form is used; passing
    ``preserve_null_and_empty_arrays`` switches to the document form.
    """
    if preserve_null_and_empty_arrays is None:
        return Stage(StageOperator.UNWIND, field_ref(path))
    return Stage(
        StageOperator.UNWIND,
        {
            "path": field_ref(path),
            "preserveNullAndEmptyArrays": preserve_null_and_empty_arrays,
        },
    )


def group(body: Mapping[str, Any]) -> Stage:
    return Stage(StageOperator.GROUP, body)


def match(body: Mapping[str, Any]) -> Stage:
    return Stage(StageOperator.MATCH, body)


def to_mongo_pipeline(stages: Iterable[Stage]) -> List[Dict[str, Any]]:
    """Render stages into the list form accepted by ``Collection.aggregate``."""
    return [stage.to_document() for stage in stages]
