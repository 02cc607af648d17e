"""Tests covering the game controller's key handling and session flow."""

import json
import random

import pytest

from advocacy_quest.environment import default_grid
from advocacy_quest.game import (
    CONTENT_APPLIED_MESSAGE,
    CONTENT_REJECTED_MESSAGE,
    CORRECT_MESSAGE,
    INCORRECT_MESSAGE,
    NO_DIALOG_MESSAGE,
    NO_SAVED_PROGRESS_MESSAGE,
    PROGRESS_EXPORTED_MESSAGE,
    PROGRESS_LOADED_MESSAGE,
    PROGRESS_REJECTED_MESSAGE,
    GameController,
    GameState,
)
from advocacy_quest.interaction import NO_ONE_NEARBY
from advocacy_quest.persistence import InMemorySnapshotStore, JsonSnapshotStore
from advocacy_quest.scenario import ScenarioEngine, default_content
from advocacy_quest.schemas import NPC, PlayerState, Position


def snapshot_of(controller: GameController) -> tuple:
    state = controller.state
    return (
        state.player.position,
        state.player.comfort,
        state.player.score,
        state.active,
    )


def open_guide_dialog(controller: GameController) -> None:
    controller.handle_key("ArrowDown")  # (1,1) -> (1,2), next to the guide at (2,2)
    controller.handle_key("Enter")


def test_new_session_defaults():
    state = GameState.new()

    assert state.player.position == Position(x=1, y=1)
    assert state.player.comfort == 7
    assert state.player.score == 0
    assert state.active is None
    assert state.message.startswith("Use arrows/WASD")


def test_new_session_rejects_wall_start():
    with pytest.raises(ValueError):
        GameState.new(start=Position(x=0, y=0))


def test_walk_talk_and_answer_guide():
    controller = GameController()

    controller.handle_key("s")
    message = controller.handle_key(" ")

    assert message == "Talking with Guide…"
    assert controller.state.active.scenario_id == "unclear-instruction"

    message = controller.choose("ask-clarify")

    assert message == CORRECT_MESSAGE
    assert controller.state.player.comfort == 9
    assert controller.state.player.score == 100
    assert controller.state.active.feedback.correct is True
    # Dialog stays open after a choice
    assert controller.state.dialog_open


def test_interact_with_nobody_changes_only_message():
    controller = GameController()
    for key in ["ArrowRight"] * 5 + ["ArrowDown"] * 2:
        controller.handle_key(key)
    before = snapshot_of(controller)

    message = controller.handle_key("Enter")

    assert message == NO_ONE_NEARBY
    assert snapshot_of(controller) == before


def test_open_dialog_ignores_movement_and_interact():
    controller = GameController()
    open_guide_dialog(controller)
    before = snapshot_of(controller)

    for key in ["ArrowUp", "d", "Enter", " ", "x"]:
        controller.handle_key(key)

    assert snapshot_of(controller) == before


def test_escape_closes_dialog_without_side_effects():
    controller = GameController()
    open_guide_dialog(controller)
    position = controller.state.player.position

    controller.handle_key("Escape")

    assert controller.state.active is None
    assert controller.state.player.position == position
    assert (controller.state.player.comfort, controller.state.player.score) == (7, 0)


def test_escape_without_dialog_is_harmless():
    controller = GameController()
    before = snapshot_of(controller)

    controller.handle_key("Escape")

    assert snapshot_of(controller) == before


def test_reopening_clears_previous_feedback():
    controller = GameController()
    open_guide_dialog(controller)
    controller.choose("leave")
    controller.handle_key("Escape")

    controller.handle_key("Enter")

    assert controller.state.active.feedback is None


def test_repeated_attempts_each_apply():
    controller = GameController()
    open_guide_dialog(controller)

    assert controller.choose("copy-peer") == INCORRECT_MESSAGE
    controller.choose("ask-clarify")
    controller.choose("ask-clarify")

    assert controller.state.player.score == 200
    assert controller.state.player.comfort == 10  # 7 - 1 + 2 + 2 clamped


def test_choose_without_dialog_or_unknown_choice():
    controller = GameController()
    before = snapshot_of(controller)

    assert controller.choose("ask-clarify") == NO_DIALOG_MESSAGE
    assert controller.choose_index(1) == NO_DIALOG_MESSAGE
    assert snapshot_of(controller) == before

    open_guide_dialog(controller)
    before = snapshot_of(controller)
    assert "Unknown choice" in controller.choose("nope")
    assert "between 1 and 4" in controller.choose_index(9)
    assert snapshot_of(controller) == before


def test_choose_index_is_one_based():
    controller = GameController()
    open_guide_dialog(controller)

    controller.choose_index(4)  # "visual", correct

    assert controller.state.player.score == 100


def test_dangling_npc_scenario_is_a_noop():
    state = GameState(
        grid=default_grid(),
        player=PlayerState(position=Position(x=1, y=2)),
        engine=ScenarioEngine(default_content().scenarios),
        npcs=[NPC(id="ghost", name="Ghost", x=2, y=2, scenario_id="missing")],
    )
    controller = GameController(state)

    message = controller.handle_key("Enter")

    assert message == "Ghost has no scenario to share right now."
    assert controller.state.active is None


def test_invariants_hold_over_random_play():
    controller = GameController()
    grid = controller.state.grid
    rng = random.Random(3)
    keys = ["ArrowLeft", "ArrowRight", "ArrowUp", "ArrowDown", "Enter", "Escape"]

    for _ in range(3000):
        previous_score = controller.state.player.score
        if controller.state.dialog_open and rng.random() < 0.7:
            controller.choose_index(rng.randint(1, 4))
        else:
            controller.handle_key(rng.choice(keys))
        player = controller.state.player
        assert grid.is_walkable(player.position.x, player.position.y)
        assert 0 <= player.comfort <= 10
        assert player.score >= previous_score


def test_apply_content_replaces_and_closes_dialog():
    controller = GameController()
    open_guide_dialog(controller)
    document = {
        "scenarios": [
            {
                "id": "fire-drill",
                "cue": "The alarm hurts my ears.",
                "context": "Hallway.",
                "prompt": "A fire drill starts.",
                "choices": [{"id": "cover", "label": "Cover ears and follow the line.", "isCorrect": True, "why": "Safe and calming."}],
            }
        ],
        "npcs": [{"id": "coach", "name": "Coach", "x": 1, "y": 3, "scenarioId": "fire-drill"}],
    }

    message = controller.apply_content(json.dumps(document))

    assert message == CONTENT_APPLIED_MESSAGE
    assert controller.state.active is None
    assert [s.id for s in controller.state.scenarios] == ["fire-drill"]
    controller.handle_key("Enter")
    assert controller.state.active.scenario_id == "fire-drill"


def test_invalid_content_keeps_previous_configuration():
    controller = GameController()
    before = controller.state.content

    assert controller.apply_content("{not json") == CONTENT_REJECTED_MESSAGE
    assert controller.apply_content('{"npcs": [{"id": "x", "name": "X", "x": 1, "y": 1, "scenarioId": "nope"}]}') == CONTENT_REJECTED_MESSAGE
    assert controller.state.content == before


def test_reset_and_dump_content():
    controller = GameController()
    controller.apply_content(json.dumps({"npcs": []}))
    assert controller.state.npcs == []

    controller.reset_content()

    assert len(controller.state.npcs) == 3
    assert json.loads(controller.content_text())["npcs"][0]["id"] == "guide"


def test_load_content_file_missing(tmp_path):
    controller = GameController()

    assert controller.load_content_file(tmp_path / "missing.json") == CONTENT_REJECTED_MESSAGE


def test_import_malformed_snapshot_leaves_state():
    controller = GameController()
    controller.handle_key("ArrowRight")
    before = snapshot_of(controller)

    message = controller.import_progress("{not json")

    assert message == PROGRESS_REJECTED_MESSAGE
    assert snapshot_of(controller) == before


def test_import_comfort_is_clamped():
    controller = GameController()

    assert controller.import_progress('{"comfort": 15}') == PROGRESS_LOADED_MESSAGE
    assert controller.state.player.comfort == 10


def test_import_position_closes_dialog():
    controller = GameController()
    open_guide_dialog(controller)

    controller.import_progress('{"player": {"x": 8, "y": 4}}')

    assert controller.state.active is None
    assert controller.state.player.position == Position(x=8, y=4)


def test_export_import_round_trip_through_store():
    store = InMemorySnapshotStore()
    first = GameController(store=store)
    open_guide_dialog(first)
    first.choose("ask-clarify")

    assert first.save_progress() == PROGRESS_EXPORTED_MESSAGE

    second = GameController(store=store)
    assert second.load_progress() == PROGRESS_LOADED_MESSAGE
    assert second.state.player.position == first.state.player.position
    assert second.state.player.comfort == first.state.player.comfort
    assert second.state.player.score == first.state.player.score


def test_load_progress_with_empty_or_missing_store():
    assert GameController(store=InMemorySnapshotStore()).load_progress() == NO_SAVED_PROGRESS_MESSAGE

    with pytest.raises(RuntimeError):
        GameController().save_progress()


def test_non_utf8_snapshot_file_is_rejected(tmp_path):
    path = tmp_path / "progress.json"
    path.write_bytes(b"\xff\xfe{not utf8")
    controller = GameController(store=JsonSnapshotStore(path))
    controller.handle_key("ArrowRight")
    before = snapshot_of(controller)

    assert controller.load_progress() == PROGRESS_REJECTED_MESSAGE
    assert snapshot_of(controller) == before


def test_oversized_snapshot_file_is_rejected(tmp_path):
    path = tmp_path / "progress.json"
    path.write_text('{"comfort": 2, "score": 1' + "0" * 5000 + ', "player": {"x": 1' + "0" * 5000 + ', "y": 1}}', "utf-8")
    controller = GameController(store=JsonSnapshotStore(path))
    before = snapshot_of(controller)

    assert controller.load_progress() == PROGRESS_REJECTED_MESSAGE
    assert snapshot_of(controller) == before


def test_deeply_nested_import_is_rejected():
    controller = GameController()
    before = snapshot_of(controller)

    assert controller.import_progress("[" * 200_000 + "]" * 200_000) == PROGRESS_REJECTED_MESSAGE
    assert snapshot_of(controller) == before


def test_non_utf8_content_file_keeps_configuration(tmp_path):
    path = tmp_path / "content.json"
    path.write_bytes(b"\xff\xfe{not utf8")
    controller = GameController()
    before = controller.state.content

    assert controller.load_content_file(path) == CONTENT_REJECTED_MESSAGE
    assert controller.state.content == before


def test_oversized_content_is_rejected():
    controller = GameController()
    before = controller.state.content
    text = '{"npcs": [{"id": "a", "name": "A", "x": 1' + "0" * 5000 + ', "y": 1, "scenarioId": "noise-cafeteria"}]}'

    assert controller.apply_content(text) == CONTENT_REJECTED_MESSAGE
    assert controller.apply_content('{"npcs": ' + "[" * 200_000 + "]" * 200_000 + "}") == CONTENT_REJECTED_MESSAGE
    assert controller.state.content == before
