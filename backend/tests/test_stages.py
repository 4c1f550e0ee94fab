"""Unit tests for aggregation stage values."""

import dataclasses

import pytest

from scanstats.entities.enums import StageOperator
from scanstats.pipeline.stages import (
    Stage,
    field_ref,
    group,
    match,
    project,
    to_mongo_pipeline,
    unwind,
)


def test_stage_renders_operator_and_body():
    stage = group({"_id": "$result", "count": {"$sum": 1}})

    assert stage.operator == StageOperator.GROUP
    assert stage.to_document() == {"$group": {"_id": "$result", "count": {"$sum": 1}}}


def test_field_ref_prefixes_path():
    assert field_ref("codes.language") == "$codes.language"


def test_unwind_short_form():
    assert unwind("codes").to_document() == {"$unwind": "$codes"}


def test_unwind_document_form_with_options():
    stage = unwind("startedAt", preserve_null_and_empty_arrays=False)

    assert stage.to_document() == {
        "$unwind": {"path": "$startedAt", "preserveNullAndEmptyArrays": False}
    }


def test_stage_is_frozen():
    stage = match({"result": "passed"})

    with pytest.raises(dataclasses.FrozenInstanceError):
        stage.operator = StageOperator.PROJECT


def test_rendered_document_is_a_copy():
    body = {"finishedAt": {"$gte": 1}}
    stage = match(body)

    rendered = stage.to_document()
    rendered["$match"]["finishedAt"]["$gte"] = 99

    assert stage.body["finishedAt"]["$gte"] == 1


def test_to_mongo_pipeline_keeps_order():
    stages = (
        project({"commitAuthors": 1}),
        unwind("commitAuthors"),
        group({"_id": "$commitAuthors"}),
    )

    rendered = to_mongo_pipeline(stages)

    assert [list(doc)[0] for doc in rendered] == ["$project", "$unwind", "$group"]


def test_stage_equality_is_structural():
    assert Stage(StageOperator.PROJECT, {"a": 1}) == project({"a": 1})
