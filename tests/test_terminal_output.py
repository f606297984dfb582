"""Tests for the ASCII fallback used on non-UTF-8 terminals."""

from io import StringIO

from resweep.utils import logger
from resweep.utils.logger import sanitize_for_terminal
from resweep.utils.safe_console import SafeConsole


class TestSanitizeForTerminal:
    """Test glyph replacement."""

    def test_forced_sanitization_replaces_glyphs(self):
        """Test every report glyph has an ASCII stand-in."""
        text = "✓ Restored • ⚠ 2 path(s) → App/logo.png ✗ …"

        assert sanitize_for_terminal(text, force=True) == \
            "[OK] Restored * [WARN] 2 path(s) -> App/logo.png [FAIL] ..."

    def test_utf8_terminal_keeps_glyphs(self, monkeypatch):
        """Test UTF-8 terminals get the glyphs unchanged."""
        monkeypatch.setattr(logger, "is_utf8_capable", lambda: True)

        assert sanitize_for_terminal("✓ done") == "✓ done"

    def test_plain_ascii_is_untouched(self):
        """Test plain text passes through sanitization."""
        assert sanitize_for_terminal("logo.png", force=True) == "logo.png"


class TestSafeConsole:
    """Test the console wrapper on a non-UTF-8 terminal."""

    def test_prints_ascii_fallback(self, monkeypatch):
        """Test printed glyphs are replaced before rendering."""
        monkeypatch.setattr("resweep.utils.safe_console.is_utf8_capable", lambda: False)
        buffer = StringIO()
        console = SafeConsole(file=buffer, width=80)

        console.print("✓ Restored 1 resource(s)")

        assert buffer.getvalue().strip() == "[OK] Restored 1 resource(s)"
