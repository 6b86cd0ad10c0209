import unittest

from css_compressor.extract import (
    extract_data_urls, harvest_comments, preserve_strings, shorten_alpha_filter
)
from css_compressor.tokens import TokenTables, candidate_placeholder, preserved_placeholder


class ExtractDataUrlsTest(unittest.TestCase):

    def setUp(self):
        self.tables = TokenTables()

    def test_unquoted_data_url_is_preserved_without_whitespace(self):
        css = "a{background:url(data:image/png;base64, AB CD==)}"
        result = extract_data_urls(css, self.tables)
        self.assertEqual(result, "a{background:url(%s)}" % preserved_placeholder(0))
        self.assertEqual(self.tables.preserved, ["data:image/png;base64,ABCD=="])

    def test_quoted_data_url_keeps_quotes(self):
        css = 'a{background:url( "data:text/plain;a b" )}'
        result = extract_data_urls(css, self.tables)
        self.assertEqual(result, "a{background:url(%s)}" % preserved_placeholder(0))
        self.assertEqual(self.tables.preserved, ['"data:text/plain;ab"'])

    def test_escaped_terminator_is_skipped(self):
        css = 'a{background:url("data:a\\"b")}'
        extract_data_urls(css, self.tables)
        self.assertEqual(self.tables.preserved, ['"data:a\\"b"'])

    def test_several_data_urls(self):
        css = "a{b:url(data:x)}c{d:url('data:y')}"
        result = extract_data_urls(css, self.tables)
        self.assertEqual(
            result,
            "a{b:url(%s)}c{d:url(%s)}" % (preserved_placeholder(0), preserved_placeholder(1))
        )
        self.assertEqual(self.tables.preserved, ["data:x", "'data:y'"])

    def test_unterminated_data_url_is_left_alone(self):
        css = "a{background:url(data:image/png"
        self.assertEqual(extract_data_urls(css, self.tables), css)
        self.assertEqual(self.tables.preserved, [])

    def test_regular_url_is_not_touched(self):
        css = "a{background:url(img/logo.png)}"
        self.assertEqual(extract_data_urls(css, self.tables), css)


class HarvestCommentsTest(unittest.TestCase):

    def test_comments_are_replaced_by_placeholders(self):
        tables = TokenTables()
        result = harvest_comments("/* one */a{}/*two*/", tables)
        self.assertEqual(
            result,
            "/*%s*/a{}/*%s*/" % (candidate_placeholder(0), candidate_placeholder(1))
        )
        self.assertEqual(tables.comments, [" one ", "two"])

    def test_unterminated_comment_runs_to_end(self):
        tables = TokenTables()
        result = harvest_comments("a{}/* never closed", tables)
        self.assertEqual(result, "a{}/*%s*/" % candidate_placeholder(0))
        self.assertEqual(tables.comments, [" never closed"])

    def test_star_after_comment_is_not_a_new_comment(self):
        tables = TokenTables()
        result = harvest_comments("/* a */* b{}", tables)
        self.assertEqual(result, "/*%s*/* b{}" % candidate_placeholder(0))


class PreserveStringsTest(unittest.TestCase):

    def test_string_body_goes_to_preserved_tokens(self):
        tables = TokenTables()
        result = preserve_strings('a{content:"x  y"}', tables)
        self.assertEqual(result, 'a{content:"%s"}' % preserved_placeholder(0))
        self.assertEqual(tables.preserved, ["x  y"])

    def test_single_quotes_with_escape(self):
        tables = TokenTables()
        result = preserve_strings("a{content:'it\\'s'}", tables)
        self.assertEqual(result, "a{content:'%s'}" % preserved_placeholder(0))
        self.assertEqual(tables.preserved, ["it\\'s"])

    def test_comment_inside_string_is_put_back(self):
        tables = TokenTables()
        css = harvest_comments('a{content:"/* hi */"}', tables)
        preserve_strings(css, tables)
        self.assertEqual(tables.preserved, ["/* hi */"])

    def test_alpha_filter_is_shortened_inside_strings(self):
        tables = TokenTables()
        preserve_strings("a{filter:'progid:DXImageTransform.Microsoft.Alpha(Opacity=80)'}", tables)
        self.assertEqual(tables.preserved, ["alpha(opacity=80)"])


class ShortenAlphaFilterTest(unittest.TestCase):

    def test_case_insensitive(self):
        self.assertEqual(
            shorten_alpha_filter("PROGID:DXIMAGETRANSFORM.MICROSOFT.ALPHA(OPACITY=50)"),
            "alpha(opacity=50)"
        )


if __name__ == '__main__':
    unittest.main()
