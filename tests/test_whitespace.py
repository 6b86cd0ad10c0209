import unittest

from css_compressor.whitespace import hoist_charset, normalize_whitespace


class NormalizeWhitespaceTest(unittest.TestCase):

    def test_simple(self):
        source = """
            a  {
                color : red ;
            }
        """
        self.assertEqual(normalize_whitespace(source).strip(), "a{color:red}")

    def test_descendant_pseudo_class_keeps_its_space(self):
        self.assertEqual(normalize_whitespace("p :link { color : red }"), "p :link{color:red}")

    def test_pseudo_class_without_space(self):
        self.assertEqual(normalize_whitespace("a:hover , a:focus { color : red }"),
                         "a:hover,a:focus{color:red}")

    def test_first_line_keeps_space_for_ie6(self):
        self.assertEqual(normalize_whitespace("p:first-line {color:red}"), "p:first-line {color:red}")
        self.assertEqual(normalize_whitespace("p:first-letter, b {color:red}"), "p:first-letter ,b{color:red}")

    def test_child_combinator(self):
        self.assertEqual(normalize_whitespace("ul > li + li { }"), "ul>li+li{}")

    def test_media_query_and(self):
        self.assertEqual(
            normalize_whitespace("@media screen and (max-width: 100px) { a { b : c } }"),
            "@media screen and (max-width:100px){a{b:c}}"
        )

    def test_space_after_comment_end_is_removed(self):
        self.assertEqual(normalize_whitespace("a{}/*x*/ b{}"), "a{}/*x*/b{}")

    def test_trailing_semicolons_are_removed(self):
        self.assertEqual(normalize_whitespace("a{color:red;;}"), "a{color:red}")

    def test_important(self):
        self.assertEqual(normalize_whitespace("a{color:red !important}"), "a{color:red!important}")


class HoistCharsetTest(unittest.TestCase):

    def test_charset_moves_to_top(self):
        self.assertEqual(hoist_charset('a{color:red}@charset "x";'), '@charset "x";a{color:red}')

    def test_only_first_charset_is_kept(self):
        self.assertEqual(hoist_charset('@charset "a";b{c:d}@charset "e";'), '@charset "a";b{c:d}')

    def test_without_charset(self):
        self.assertEqual(hoist_charset("a{b:c}"), "a{b:c}")


if __name__ == '__main__':
    unittest.main()
