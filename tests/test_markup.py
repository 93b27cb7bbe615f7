import pytest

from podstudio.services.markup import escape_markup, render_ssml


class TestEscapeMarkup:
    def test_escapes_all_five_characters(self):
        assert escape_markup("""a & b < c > d " e ' f""") == (
            "a &amp; b &lt; c &gt; d &quot; e &apos; f"
        )

    def test_plain_text_is_unchanged(self):
        assert escape_markup("Hello there") == "Hello there"

    def test_ampersand_escaped_before_other_entities(self):
        assert escape_markup("<") == "&lt;"
        assert escape_markup("&lt;") == "&amp;lt;"

    @pytest.mark.parametrize("text", ["&", "<", ">", '"', "'", "rock & roll"])
    def test_double_escaping_is_detectable(self, text):
        once = escape_markup(text)
        assert escape_markup(once) != once


class TestRenderSsml:
    def test_wraps_in_prosody(self):
        assert render_ssml("Hi", "slow") == '<speak><prosody rate="slow">Hi</prosody></speak>'

    def test_escapes_exactly_once(self):
        ssml = render_ssml("Salt & pepper")
        assert "Salt &amp; pepper" in ssml
        assert "&amp;amp;" not in ssml

    def test_default_rate(self):
        assert 'rate="medium"' in render_ssml("Hi")
