from jobhttpd.util.text import COMMANDS, help, reverse, to_upper


def test_reverse():
    assert reverse("abcd") == "dcba"


def test_reverse_empty():
    assert reverse("") == ""


def test_to_upper():
    assert to_upper("rust") == "RUST"


def test_to_upper_only_ascii():
    assert to_upper("straße é1") == "STRAßE é1"


def test_help():
    help_text = help()
    assert "/fibonacci?num=N" in help_text
    assert "/help" in help_text
    assert help_text.startswith("Available commands:")


def test_help_lists_every_command_once():
    lines = help().splitlines()
    assert lines[0] == "Available commands:"
    assert lines[1:] == [f" - {command}" for command in COMMANDS]