from lib.tmux_format import (
    DELIMITER,
    SESSION_FIELDS,
    SESSION_FORMAT,
    WINDOW_FIELDS,
    WINDOW_FORMAT,
    parse_bool,
    parse_int,
    parse_session_line,
    parse_sessions,
    parse_window_line,
    parse_windows,
    split_records,
)
from models.session_info import SessionInfo


def test_formats_request_every_field_in_order():
    assert SESSION_FORMAT.split(DELIMITER) == ["#{%s}" % f for f in SESSION_FIELDS]
    assert WINDOW_FORMAT.split(DELIMITER) == ["#{%s}" % f for f in WINDOW_FIELDS]
    assert len(SESSION_FIELDS) == 7
    assert len(WINDOW_FIELDS) == 5


def test_parse_session_line():
    session = parse_session_line("web|||2|||1|||1700000000|||editor|||3|||1700003600")
    assert session == SessionInfo(
        name="web",
        window_count=2,
        attached=True,
        created="1700000000",
        current_window="editor",
        pane_count=3,
        last_attached=1700003600,
    )
    assert session.created_at.year == 2023
    assert session.last_attached_at is not None


def test_missing_trailing_fields_default():
    session = parse_session_line("web|||2|||0|||1700000000|||editor|||3")
    assert session.name == "web"
    assert session.pane_count == 3
    assert session.last_attached == 0
    assert session.last_attached_at is None

    bare = parse_session_line("lonely")
    assert bare.name == "lonely"
    assert bare.window_count == 0
    assert bare.attached is False
    assert bare.current_window == ""


def test_malformed_numbers_do_not_discard_record():
    session = parse_session_line(DELIMITER.join(["web", "two", "", "", "", "x", ""]))
    assert session.name == "web"
    assert session.window_count == 0
    assert session.pane_count == 0
    assert session.last_attached == 0
    assert session.created_at is None


def test_delimiter_safe_for_pipes_and_commas():
    session = parse_session_line("a|b,c|||1|||0|||0|||x,y|z|||1|||0")
    assert session.name == "a|b,c"
    assert session.current_window == "x,y|z"


def test_parse_int_and_bool():
    assert parse_int("42") == 42
    assert parse_int(" 7 ") == 7
    assert parse_int("") == 0
    assert parse_int("1.5") == 0
    assert parse_bool("1") is True
    assert parse_bool("0") is False
    assert parse_bool("true") is False
    assert parse_bool("") is False


def test_blank_output_yields_nothing():
    assert parse_sessions("") == []
    assert parse_sessions("\n   \n\t\n") == []
    assert parse_windows("  \n") == []
    assert split_records("a\n\n b \n") == ["a", " b "]


def test_parse_windows_keeps_list_order():
    output = (
        "@4|||2|||logs|||0|||b25d,80x24,0,0,4\n"
        "@1|||0|||editor|||1|||b25d,80x24,0,0,1\n"
        "@7|||1|||shell|||0|||b25d,80x24,0,0,7\n"
    )
    windows = parse_windows(output, "web")
    assert [w.id for w in windows] == ["@4", "@1", "@7"]
    assert [w.index for w in windows] == [2, 0, 1]
    assert [w.active for w in windows] == [False, True, False]
    assert windows[0].layout == "b25d,80x24,0,0,4"
    assert all(w.session_name == "web" for w in windows)


def test_parse_window_line_missing_fields():
    window = parse_window_line("@3|||")
    assert window.id == "@3"
    assert window.index == 0
    assert window.name == ""
    assert window.active is False
