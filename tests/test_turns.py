"""Tests for turn segmentation."""

from occ.compaction.turns import (
    get_tool_call_ids,
    identify_turn_boundaries,
    map_messages_to_turns,
    message_has_tool_calls,
)

from fixtures import assistant, plain_turn, text, tool_call, tool_result, tool_turn, user


class TestMessageHelpers:
    def test_string_content_has_no_calls(self):
        assert not message_has_tool_calls(assistant(text="hi"))
        assert get_tool_call_ids(assistant(text="hi")) == []

    def test_ids_in_order(self):
        msg = assistant(tool_call("b"), text("x"), tool_call("a"))
        assert message_has_tool_calls(msg)
        assert get_tool_call_ids(msg) == ["b", "a"]


class TestIdentifyTurnBoundaries:
    def test_empty(self):
        assert identify_turn_boundaries([]) == []

    def test_turn_per_user_message(self):
        messages = plain_turn(0) + tool_turn(1) + plain_turn(2)
        turns = identify_turn_boundaries(messages)

        assert [(t.start_index, t.end_index) for t in turns] == [(0, 1), (2, 5), (6, 7)]
        assert [t.turn_index for t in turns] == [0, 1, 2]
        assert [t.has_tool_calls for t in turns] == [False, True, False]

    def test_tool_results_do_not_start_turns(self):
        messages = [
            user(),
            assistant(tool_call("a")),
            tool_result("a"),
            assistant(tool_call("b")),
            tool_result("b"),
        ]
        turns = identify_turn_boundaries(messages)
        assert len(turns) == 1
        assert len(turns[0]) == 5

    def test_turns_cover_every_message(self):
        messages = tool_turn(0) + plain_turn(1) + tool_turn(2)
        owners = map_messages_to_turns(identify_turn_boundaries(messages), len(messages))
        assert all(owner is not None for owner in owners)

    def test_leading_messages_form_tool_free_turn(self):
        messages = [assistant(tool_call("x")), tool_result("x"), *tool_turn(1)]
        turns = identify_turn_boundaries(messages)

        assert (turns[0].start_index, turns[0].end_index) == (0, 1)
        assert turns[0].has_tool_calls is False
        assert turns[1].has_tool_calls is True

    def test_no_user_messages(self):
        turns = identify_turn_boundaries([assistant(tool_call("x")), tool_result("x")])
        assert len(turns) == 1
        assert not turns[0].has_tool_calls

    def test_contains(self):
        turn = identify_turn_boundaries(tool_turn(0))[0]
        assert 0 in turn and 3 in turn
        assert 4 not in turn
