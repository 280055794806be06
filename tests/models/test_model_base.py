"""Unit tests for blandango.models.model_base and model_params."""

from pydantic import BaseModel

from blandango.models.model_base import FlatResponse, Response, WireModel
from blandango.models.model_params import DocumentQueryParams, OverwriteMode


class Info(BaseModel):
    name: str
    is_system: bool = False


class Settings(WireModel):
    wait_for_sync: bool
    journal_size: int | None = None


class TestEnvelopes:
    """Nested and flattened envelopes decode to the same result."""

    def test_nested(self) -> None:
        response = Response[Info].model_validate(
            {"error": False, "code": 200, "result": {"name": "widgets"}}
        )
        assert response.code == 200
        assert response.result == Info(name="widgets")

    def test_flat(self) -> None:
        response = FlatResponse[Info].model_validate(
            {"error": False, "code": 200, "name": "widgets", "is_system": True}
        )
        assert response.error is False
        assert response.result == Info(name="widgets", is_system=True)

    def test_shapes_are_equivalent(self) -> None:
        nested = Response[Info].model_validate(
            {"error": False, "code": 200, "result": {"name": "widgets"}}
        )
        flat = FlatResponse[Info].model_validate({"error": False, "code": 200, "name": "widgets"})
        assert nested.result == flat.result

    def test_flat_accepts_nested_shape(self) -> None:
        response = FlatResponse[Info].model_validate(
            {"error": False, "code": 200, "result": {"name": "widgets"}}
        )
        assert response.result == Info(name="widgets")

    def test_flat_dict_result(self) -> None:
        response = FlatResponse[dict].model_validate({"code": 200, "shards": ["s1", "s2"]})
        assert response.result == {"shards": ["s1", "s2"]}


class TestWireModel:
    """camelCase on the wire, snake_case in Python."""

    def test_to_wire(self) -> None:
        assert Settings(wait_for_sync=True).to_wire() == {"waitForSync": True}

    def test_parse_camel_case(self) -> None:
        settings = Settings.model_validate({"waitForSync": False, "journalSize": 10})
        assert settings.wait_for_sync is False
        assert settings.journal_size == 10

    def test_populate_by_name(self) -> None:
        assert Settings(wait_for_sync=True, journal_size=5).journal_size == 5


class TestDocumentQueryParams:
    """Parameter presets used by the document facade."""

    def test_defaults(self) -> None:
        params = DocumentQueryParams()
        assert params.wait_for_sync is True
        assert params.return_new is True
        assert params.return_old is None

    def test_presets(self) -> None:
        assert DocumentQueryParams.returning_old().to_wire() == {"waitForSync": True, "returnOld": True}
        assert DocumentQueryParams.silenced().to_wire() == {"waitForSync": True, "silent": True}
        assert DocumentQueryParams.bare().to_wire() == {"waitForSync": True}

    def test_overwrite_mode_by_value(self) -> None:
        params = DocumentQueryParams(overwrite_mode=OverwriteMode.REPLACE)
        assert params.to_wire()["overwriteMode"] == "replace"
