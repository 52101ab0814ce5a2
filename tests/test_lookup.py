import unittest
from struct import pack, unpack

import typedini
from typedini import NativeType

SETTINGS = """\
[Numbers]
answer=42
negative=-7
plus=+3
padded= 4
underscored=1_000
word=abc
ratio=0.1
huge=1e300
empty=

[Flags]
one=1
true=true
zero=0
false=false
empty=
yes=yes
upper=TRUE
"""


class TestNativeLookup(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = typedini.parse(SETTINGS)

    def test_string(self) -> None:
        self.assertEqual(self.doc.lookup("Numbers", "word"), ("abc", True))
        self.assertEqual(
            self.doc.lookup("Numbers", "padded", NativeType.STRING),
            (" 4", True))

    def test_signed_int(self) -> None:
        for key, expected in (("answer", 42), ("negative", -7), ("plus", 3)):
            with self.subTest(key=key):
                self.assertEqual(self.doc.lookup("Numbers", key, int),
                                 (expected, True))

    def test_signed_int_is_strict(self) -> None:
        for key in ("padded", "underscored", "word", "ratio", "empty"):
            with self.subTest(key=key):
                self.assertEqual(
                    self.doc.lookup("Numbers", key, NativeType.SIGNED_INT),
                    (None, False))

    def test_unsigned_int(self) -> None:
        lookup = self.doc.lookup
        self.assertEqual(
            lookup("Numbers", "answer", NativeType.UNSIGNED_INT), (42, True))
        self.assertEqual(
            lookup("Numbers", "plus", NativeType.UNSIGNED_INT), (3, True))
        self.assertEqual(
            lookup("Numbers", "negative", NativeType.UNSIGNED_INT),
            (None, False))

    def test_float64(self) -> None:
        self.assertEqual(self.doc.lookup("Numbers", "ratio", float),
                         (0.1, True))
        self.assertEqual(
            self.doc.lookup("Numbers", "huge", NativeType.FLOAT64),
            (1e300, True))
        self.assertEqual(self.doc.lookup("Numbers", "answer", float),
                         (42.0, True))
        self.assertEqual(self.doc.lookup("Numbers", "padded", float),
                         (None, False))
        self.assertEqual(self.doc.lookup("Numbers", "word", float),
                         (None, False))
        self.assertEqual(self.doc.lookup("Numbers", "underscored", float),
                         (None, False))

    def test_float32(self) -> None:
        val, ok = self.doc.lookup("Numbers", "ratio", NativeType.FLOAT32)

        self.assertTrue(ok)
        self.assertEqual(val, unpack("<f", pack("<f", 0.1))[0])
        self.assertNotEqual(val, 0.1)
        self.assertAlmostEqual(val, 0.1, places=6)

    def test_float32_rejects_underscores(self) -> None:
        self.assertEqual(
            self.doc.lookup("Numbers", "underscored", NativeType.FLOAT32),
            (None, False))

    def test_float32_out_of_range(self) -> None:
        self.assertEqual(
            self.doc.lookup("Numbers", "huge", NativeType.FLOAT32),
            (None, False))

    def test_bool(self) -> None:
        expected = {
            "one": True, "true": True,
            "zero": False, "false": False, "empty": False,
            "yes": False, "upper": False,
        }
        for key, value in expected.items():
            with self.subTest(key=key):
                self.assertEqual(self.doc.lookup("Flags", key, bool),
                                 (value, True))
                self.assertEqual(
                    self.doc.lookup("Flags", key, NativeType.BOOL),
                    (value, True))

    def test_not_found(self) -> None:
        self.assertEqual(self.doc.lookup("Nope", "answer", int),
                         (None, False))
        self.assertEqual(self.doc.lookup("Numbers", "nope", int),
                         (None, False))
        self.assertEqual(self.doc.lookup(None, "answer", int),
                         (None, False))

    def test_get_value(self) -> None:
        self.assertEqual(
            self.doc.get_value("answer", int, section="Numbers"), 42)
        self.assertEqual(
            self.doc.get_value("word", int, -1, section="Numbers"), -1)
        self.assertIsNone(self.doc.get_value("answer"))

    def test_get_value_infers_type_from_default(self) -> None:
        get = self.doc.get_value
        self.assertEqual(get("answer", default=0, section="Numbers"), 42)
        self.assertEqual(get("ratio", default=1.0, section="Numbers"), 0.1)
        self.assertIs(get("one", default=False, section="Flags"), True)
        self.assertEqual(get("answer", section="Numbers"), "42")
        self.assertEqual(get("word", default=5, section="Numbers"), 5)

    def test_lookup_does_not_mutate(self) -> None:
        before = {k: v.to_dict() for k, v in self.doc.items()}
        self.doc.lookup("Numbers", "answer", int)
        self.doc.lookup("Missing", "answer", int)

        self.assertEqual({k: v.to_dict() for k, v in self.doc.items()},
                         before)


class TestDecode(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = typedini.parse(SETTINGS)

    def test_value(self) -> None:
        self.assertEqual(self.doc.decode("Numbers", "answer", int), 42)

    def test_section_not_found(self) -> None:
        with self.assertRaises(typedini.SectionNotFound):
            self.doc.decode("Nope", "answer", int)

    def test_key_not_found(self) -> None:
        with self.assertRaises(typedini.KeyNotFound) as cm:
            self.doc.decode("Numbers", "nope", int)

        self.assertIsInstance(cm.exception, KeyError)
        self.assertIsInstance(cm.exception, typedini.IniLookupError)

    def test_decoder_unavailable(self) -> None:
        class Point:
            pass

        with self.assertRaises(typedini.DecoderUnavailable):
            self.doc.decode("Numbers", "answer", Point)

    def test_conversion_error(self) -> None:
        with self.assertRaises(typedini.ConversionError) as cm:
            self.doc.decode("Numbers", "word", int)

        self.assertIsInstance(cm.exception, ValueError)
        self.assertIn("word", str(cm.exception))


class TestRemove(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = typedini.parse("top=1\n[S]\nK=v\nL=w\n")

    def test_remove_then_lookup(self) -> None:
        self.doc.remove("S", "K")

        for target in (str, int, bool, NativeType.FLOAT32):
            with self.subTest(target=target):
                self.assertEqual(self.doc.lookup("S", "K", target),
                                 (None, False))
        self.assertEqual(self.doc.lookup("S", "L"), ("w", True))

    def test_remove_default_section(self) -> None:
        self.doc.remove("top")

        self.assertEqual(self.doc.lookup("", "top"), (None, False))

    def test_remove_none_section_is_default(self) -> None:
        self.doc.remove(None, "top")

        self.assertEqual(self.doc.lookup(None, "top"), (None, False))
        self.assertIn("", self.doc)

    def test_section_survives_empty(self) -> None:
        self.doc.remove("S", "K")
        self.doc.remove("S", "L")

        self.assertIn("S", self.doc)
        self.assertEqual(len(self.doc["S"]), 0)

    def test_missing_is_noop(self) -> None:
        before = {k: v.to_dict() for k, v in self.doc.items()}
        self.doc.remove("S", "nope")
        self.doc.remove("Nope", "K")
        self.doc.remove("nope")

        self.assertEqual({k: v.to_dict() for k, v in self.doc.items()},
                         before)

    def test_bad_arity(self) -> None:
        with self.assertRaises(TypeError):
            self.doc.remove("a", "b", "c")


class TestDocument(unittest.TestCase):
    def test_clear(self) -> None:
        doc = typedini.parse("[S]\nk=v\n")
        doc.register_decoder(complex, lambda d, raw: (complex(raw), True))
        doc.clear()

        self.assertEqual(len(doc), 0)
        self.assertEqual(len(doc.decoders), 0)
        self.assertEqual(doc.source, "")
        self.assertEqual(doc.lookup("S", "k"), (None, False))

    def test_to_type_list(self) -> None:
        doc = typedini.parse(
            "[BuildingTypes]\n0=GACNST\n1=GAPOWR\n2=GACNST\n3=\n")

        self.assertEqual(doc["BuildingTypes"].to_type_list(),
                         ["GACNST", "GAPOWR"])

    def test_header_without_default_section(self) -> None:
        doc = typedini.parse("[S]\nk=v\n")

        self.assertEqual(doc.header.name, "")
        self.assertEqual(len(doc.header), 0)
        self.assertNotIn("", doc)
