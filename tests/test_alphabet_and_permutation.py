import unittest

from alphabet_and_permutation import Alphabet, Permutation, parse_cycles
from errors import AlphabetError, ConfigError

UPPER = Alphabet.range("A", "Z")
ROTOR_I = "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)"
REFLECTOR_B = "(AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)"


class AlphabetTests(unittest.TestCase):
    def test_range_builds_contiguous_symbols(self):
        self.assertEqual(Alphabet.range("A", "D").symbols, "ABCD")
        self.assertEqual(UPPER.size, 26)
        self.assertEqual(len(UPPER), 26)

    def test_index_symbol_bijection(self):
        for i, ch in enumerate(UPPER.symbols):
            self.assertEqual(UPPER.to_index(ch), i)
            self.assertEqual(UPPER.to_symbol(i), ch)

    def test_rejects_duplicates_and_empty(self):
        with self.assertRaises(AlphabetError):
            Alphabet("ABCA")
        with self.assertRaises(AlphabetError):
            Alphabet("")

    def test_unknown_symbol_and_index(self):
        with self.assertRaises(AlphabetError):
            UPPER.to_index("a")
        with self.assertRaises(AlphabetError):
            UPPER.to_symbol(26)
        self.assertNotIn("1", UPPER)
        self.assertIn("Q", UPPER)

    def test_equality_follows_symbols(self):
        self.assertEqual(Alphabet("ABCD"), Alphabet.range("A", "D"))
        self.assertNotEqual(Alphabet("ABCD"), Alphabet("ABDC"))


class PermutationTests(unittest.TestCase):
    def setUp(self):
        self.rotor_i = Permutation.from_cycles(ROTOR_I, UPPER)

    def test_permute_follows_cycle(self):
        self.assertEqual(self.rotor_i.permute(UPPER.to_index("A")), UPPER.to_index("E"))
        self.assertEqual(self.rotor_i.permute(UPPER.to_index("U")), UPPER.to_index("A"))
        self.assertEqual(self.rotor_i.permute_symbol("B"), "K")
        self.assertEqual(self.rotor_i.permute_symbol("W"), "B")

    def test_invert_uses_previous_symbol(self):
        self.assertEqual(self.rotor_i.invert(UPPER.to_index("E")), UPPER.to_index("A"))
        self.assertEqual(self.rotor_i.invert_symbol("A"), "U")
        self.assertEqual(self.rotor_i.invert_symbol("K"), "B")

    def test_fixed_points(self):
        s = UPPER.to_index("S")
        self.assertEqual(self.rotor_i.permute(s), s)
        self.assertEqual(self.rotor_i.invert(s), s)
        perm = Permutation.from_cycles("(AB)", UPPER)
        self.assertEqual(perm.permute_symbol("Z"), "Z")
        self.assertEqual(perm.invert_symbol("Z"), "Z")

    def test_indices_wrap(self):
        self.assertEqual(self.rotor_i.wrap(-1), 25)
        self.assertEqual(self.rotor_i.wrap(26), 0)
        self.assertEqual(self.rotor_i.wrap(-27), 25)
        self.assertEqual(self.rotor_i.permute(26), self.rotor_i.permute(0))
        self.assertEqual(self.rotor_i.permute(-26), UPPER.to_index("E"))

    def test_invert_undoes_permute(self):
        for perm in (self.rotor_i, Permutation.from_cycles(REFLECTOR_B, UPPER)):
            for i in range(UPPER.size):
                self.assertEqual(perm.invert(perm.permute(i)), i)
                self.assertEqual(perm.permute(perm.invert(i)), i)

    def test_derangement(self):
        self.assertFalse(self.rotor_i.derangement())
        self.assertTrue(Permutation.from_cycles(REFLECTOR_B, UPPER).derangement())
        abcd = Alphabet("ABCD")
        self.assertFalse(Permutation.from_cycles("(AB)", abcd).derangement())
        self.assertFalse(Permutation.from_cycles("(AB) (C) (D)", abcd).derangement())
        self.assertTrue(Permutation.from_cycles("(AB)(CD)", abcd).derangement())
        self.assertTrue(Permutation.from_cycles("(ACBD)", abcd).derangement())

    def test_empty_cycles_is_identity(self):
        perm = Permutation.from_cycles("", UPPER)
        self.assertEqual(perm.cycles, ())
        self.assertEqual([perm.permute(i) for i in range(26)], list(range(26)))


class ParseCyclesTests(unittest.TestCase):
    def test_whitespace_and_adjacent_cycles(self):
        self.assertEqual(parse_cycles("  (AB)(CD)\n (EFG) ", UPPER), ["AB", "CD", "EFG"])
        self.assertEqual(parse_cycles("( A B )", UPPER), ["AB"])

    def test_malformed_text(self):
        for text in ("(AB) CD", "(AB", "AB)", "()", "((AB))"):
            with self.subTest(text=text):
                with self.assertRaises(ConfigError):
                    parse_cycles(text, UPPER)

    def test_overlapping_cycles(self):
        with self.assertRaises(ConfigError):
            parse_cycles("(AB) (BC)", UPPER)
        with self.assertRaises(ConfigError):
            parse_cycles("(ABA)", UPPER)

    def test_foreign_symbols(self):
        with self.assertRaises(ConfigError):
            parse_cycles("(A1)", UPPER)
        with self.assertRaises(AlphabetError):
            Permutation(["A1"], UPPER)


if __name__ == "__main__":
    unittest.main()
