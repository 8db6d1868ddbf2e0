import json
from datetime import datetime

import pytest

from campuslife.social import (
    SEPARATOR,
    Message,
    MessageBoard,
    SocialError,
    parse_reply,
)

NOW = datetime(2024, 5, 1, 9, 30, 15)


@pytest.fixture
def board(tmp_path):
    return MessageBoard(tmp_path / "messages.json")


def test_parse_reply_plain_text():
    assert parse_reply("  hello there  ") == (None, "hello there")


def test_parse_reply_addressed():
    assert parse_reply("@bob   see you  ") == ("bob", "see you")


def test_parse_reply_without_space_is_not_reply():
    assert parse_reply("@bob") == (None, "@bob")


def test_post_prepends_and_saves(board):
    first = board.post("alice", "first", None, NOW)
    second = board.post("bob", "second", None, NOW)
    assert [m.id for m in board.messages] == [second.id, first.id]
    reloaded = MessageBoard(board.path)
    assert [m.content for m in reloaded.messages] == ["second", "first"]
    assert reloaded.messages[1].reply_type == "original"


def test_post_records_time_and_ids_are_unique(board):
    a = board.post("alice", "x", None, NOW)
    b = board.post("alice", "y", None, NOW)
    assert a.time == NOW.isoformat(timespec="seconds")
    assert a.id != b.id and len(a.id) == 32


def test_post_reply_links_selected(board):
    original = board.post("bob", "lunch?", None, NOW)
    reply = board.post("alice", "@bob yes", original.id, NOW)
    assert reply.is_reply
    assert reply.reply_to_user == "bob"
    assert reply.reply_to_id == original.id
    assert reply.content == "yes"


def test_post_reply_unknown_selection_has_no_link(board):
    reply = board.post("alice", "@bob yes", "missing", NOW)
    assert reply.reply_to_id == ""
    assert reply.reply_type == "reply"


def test_delete_own_message(board):
    msg = board.post("alice", "bye", None, NOW)
    board.delete(msg.id, "alice")
    assert board.find(msg.id) is None
    assert MessageBoard(board.path).messages == []


def test_delete_other_users_message_raises(board):
    msg = board.post("alice", "mine", None, NOW)
    with pytest.raises(SocialError):
        board.delete(msg.id, "bob")
    assert board.find(msg.id) is msg


def test_delete_unknown_raises(board):
    with pytest.raises(SocialError):
        board.delete("nope", "alice")


def test_find_empty_id(board):
    board.post("alice", "x", None, NOW)
    assert board.find("") is None


def test_search_matches_content_author_and_addressee(board):
    a = board.post("Alice", "Basketball match", None, NOW)
    b = board.post("carol", "@dave hi", None, NOW)
    c = board.post("erin", "nothing", None, NOW)
    assert board.search("BASKET") == [a]
    assert board.search("alice") == [a]
    assert board.search("DAVE") == [b]
    assert board.search("  ") == [c, b, a]


def test_render_original(board):
    msg = board.post("alice", "hello", None, NOW)
    assert board.render(msg) == f"[alice] 2024-05-01 09:30\nhello\n{SEPARATOR}"


def test_render_reply_with_original(board):
    original = board.post("bob", "lunch?", None, NOW)
    reply = board.post("alice", "@bob yes", original.id, NOW)
    text = board.render(reply)
    assert text.startswith("[alice 回复 bob] 2024-05-01 09:30\n")
    assert "原留言: lunch?" in text
    assert text.endswith(f"回复内容: yes\n{SEPARATOR}")
    assert text.count(SEPARATOR) == 3


def test_render_reply_without_original(board):
    reply = board.post("alice", "@bob yes", None, NOW)
    text = board.render(reply)
    assert "原留言" not in text
    assert text.count(SEPARATOR) == 2


def test_render_bad_time(board):
    msg = Message(id="x", author="a", content="c", time="garbage")
    assert board.render(msg) == f"[a] \nc\n{SEPARATOR}"


def test_reply_prefix(board):
    msg = board.post("bob", "hi", None, NOW)
    assert board.reply_prefix(msg.id) == "@bob "
    with pytest.raises(SocialError):
        board.reply_prefix("missing")


def test_load_assigns_missing_ids_and_keeps_extra(tmp_path):
    path = tmp_path / "messages.json"
    path.write_text(
        json.dumps(
            [
                {"author": "a", "content": "one", "mood": "happy"},
                {"id": "", "author": "b", "content": "two"},
                {"id": "keep", "author": "c", "content": "three"},
            ]
        ),
        encoding="utf-8",
    )
    loaded = MessageBoard(path)
    ids = [m.id for m in loaded.messages]
    assert all(ids)
    assert ids[2] == "keep"
    assert len(set(ids)) == 3
    loaded.save()
    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored[0]["mood"] == "happy"
    assert stored[0]["id"] == ids[0]


def test_load_invalid_json_gives_empty(tmp_path):
    path = tmp_path / "messages.json"
    path.write_text("{not json", encoding="utf-8")
    assert MessageBoard(path).messages == []


def test_missing_file_gives_empty(tmp_path):
    loaded = MessageBoard(tmp_path / "absent.json")
    assert loaded.messages == []
    assert not loaded.path.exists()