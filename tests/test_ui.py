import io

from rich.console import Console

from colorama import Fore, Style

from safescript.ui.colors import colors_enabled, strip_ansi
from safescript.ui.input import confirm, get_input, read_values

class _Tty(io.StringIO):
    def isatty(self):
        return True

def quiet_console():
    return Console(file=io.StringIO())

def test_get_input_reads_line():
    assert get_input("Enter", stream=io.StringIO("  some text \n"), console=quiet_console()) == "some text"

def test_read_values_in_order():
    stream = io.StringIO("first\nsecond\n")
    assert read_values(["Enter some value", "Enter other value"], stream=stream,
                       console=quiet_console()) == ["first", "second"]

def test_confirm():
    assert confirm("Continue?", stream=io.StringIO("y\n"), console=quiet_console()) is True
    assert confirm("Continue?", stream=io.StringIO("\n"), console=quiet_console()) is False

def test_colors_enabled_rules(monkeypatch):
    monkeypatch.delenv("SAFESCRIPT_COLOR_DISABLED", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert colors_enabled(_Tty()) is True
    assert colors_enabled(io.StringIO()) is False
    assert colors_enabled(io.StringIO(), force=True) is True
    monkeypatch.setenv("NO_COLOR", "1")
    assert colors_enabled(_Tty(), force=True) is False

def test_strip_ansi():
    assert strip_ansi(f"{Fore.RED}hi{Style.RESET_ALL}") == "hi"
    assert strip_ansi("plain") == "plain"
