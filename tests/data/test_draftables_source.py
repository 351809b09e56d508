import json
from pathlib import Path

import httpx
import pytest

from best_ball_rosters.data.draftables_source import DraftablesJsonSource, parse_draftable, parse_draftables
from tests.fakes.transport import FakeTransport, client_for

_ROW = {
    "playerId": 11370,
    "draftableId": 3001,
    "firstName": "Travis",
    "lastName": "Kelce",
    "displayName": "Travis Kelce",
    "position": "TE",
    "teamAbbreviation": "KC",
    "playerImage50": "https://img.example.com/kelce.png",
    "playerAttributes": [{"name": "ByeWeek", "value": "6"}, {"name": "Rookie", "value": "false"}],
}


class TestParseDraftable:
    def test_maps_fields(self) -> None:
        draftable = parse_draftable(_ROW)
        assert draftable.player_id == 11370
        assert draftable.draftable_id == 3001
        assert draftable.display_name == "Travis Kelce"
        assert draftable.position == "TE"
        assert draftable.team == "KC"
        assert draftable.image_url == "https://img.example.com/kelce.png"

    def test_attributes(self) -> None:
        draftable = parse_draftable(_ROW)
        assert draftable.bye_week == "6"
        assert draftable.attribute("Rookie") == "false"
        assert draftable.attribute("Missing") is None

    def test_missing_attributes(self) -> None:
        draftable = parse_draftable({"playerId": 1})
        assert draftable.attributes == ()
        assert draftable.bye_week is None


class TestParseDraftables:
    def test_parses_document(self) -> None:
        assert len(parse_draftables({"draftables": [_ROW, _ROW]})) == 2

    @pytest.mark.parametrize("payload", [[], {"players": []}, {"draftables": {}}])
    def test_rejects_wrong_shape(self, payload: object) -> None:
        with pytest.raises(ValueError, match="draftables"):
            parse_draftables(payload)


class TestDraftablesJsonSource:
    def test_reads_local_file(self, tmp_path: Path) -> None:
        path = tmp_path / "draftables.json"
        path.write_text(json.dumps({"draftables": [_ROW]}))
        result = DraftablesJsonSource(str(path))()
        assert result.is_ok()
        assert result.unwrap()[0].name_last == "Kelce"

    def test_fetches_url(self) -> None:
        transport = FakeTransport(httpx.Response(200, json={"draftables": [_ROW]}))
        result = DraftablesJsonSource("https://example.com/draftables.json", client=client_for(transport))()
        assert result.is_ok()

    def test_malformed_json_is_err(self, tmp_path: Path) -> None:
        path = tmp_path / "draftables.json"
        path.write_text("{not json")
        result = DraftablesJsonSource(str(path))()
        assert result.is_err()
        assert "draftables" in result.unwrap_err().message

    def test_record_without_player_id_is_err(self, tmp_path: Path) -> None:
        path = tmp_path / "draftables.json"
        path.write_text(json.dumps({"draftables": [{"firstName": "No"}]}))
        assert DraftablesJsonSource(str(path))().is_err()

    def test_non_object_record_is_err(self, tmp_path: Path) -> None:
        path = tmp_path / "draftables.json"
        path.write_text(json.dumps({"draftables": ["Ja'Marr Chase"]}))
        result = DraftablesJsonSource(str(path))()
        assert result.is_err()
        assert isinstance(result.unwrap_err().cause, ValueError)
