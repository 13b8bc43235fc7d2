import random
import unittest

from name_registry import NameExhaustedError, NameRegistry
from name_registry.config import RegistrySettings
from name_registry.naming import uniquify


class TestNameRegistry(unittest.TestCase):
    def test_fresh_candidate_returned_unchanged(self) -> None:
        registry = NameRegistry("_")
        self.assertEqual(registry.add_name("foo"), "foo")
        self.assertIn("foo", registry)

    def test_collision_gets_separator_and_number(self) -> None:
        registry = NameRegistry("_")
        registry.add_name("foo")
        second = registry.add_name("foo")
        self.assertNotEqual(second, "foo")
        self.assertTrue(second.startswith("foo_"))
        self.assertEqual(second, "foo_0")
        self.assertEqual(registry.add_name("foo"), "foo_1")

    def test_candidate_wins_over_prefix_until_taken(self) -> None:
        registry = NameRegistry("_")
        self.assertEqual(registry.add_name("foo", "bar"), "foo")
        second = registry.add_name("foo", "bar")
        self.assertEqual(second, "bar_0")
        self.assertFalse(second.startswith("foo"))

    def test_prefix_ignored_when_candidate_is_free(self) -> None:
        registry = NameRegistry("_")
        registry.add_name("bar")
        self.assertEqual(registry.add_name("foo", "bar"), "foo")

    def test_empty_names_count_up_from_zero(self) -> None:
        registry = NameRegistry(separator="_", empty_marker="")
        self.assertEqual(
            [registry.add_name("") for _ in range(4)], ["_0", "_1", "_2", "_3"]
        )

    def test_empty_marker_replaces_empty_prefix(self) -> None:
        registry = NameRegistry(separator="_", empty_marker="anon")
        self.assertEqual(registry.add_name(""), "anon0")
        self.assertEqual(registry.add_name("", ""), "anon1")
        registry.add_name("x")
        self.assertEqual(registry.add_name("x", ""), "anon2")

    def test_degenerate_configuration_issues_bare_numbers(self) -> None:
        registry = NameRegistry(separator="", empty_marker="")
        self.assertEqual(registry.add_name(""), "0")
        self.assertEqual(registry.add_name(""), "1")
        registry.add_name("a")
        self.assertEqual(registry.add_name("a"), "a0")

    def test_synthesis_skips_names_passed_through_earlier(self) -> None:
        registry = NameRegistry("_")
        registry.add_name("foo")
        registry.add_name("foo_0")
        registry.add_name("foo_1")
        self.assertEqual(registry.add_name("foo"), "foo_2")

    def test_counter_does_not_skip_numbers_claimed_later(self) -> None:
        registry = NameRegistry("_")
        registry.add_name("")
        registry.add_name("_2")
        self.assertEqual(registry.add_name(""), "_1")
        self.assertEqual(registry.add_name(""), "_3")

    def test_distinct_candidates_pass_through_in_any_order(self) -> None:
        candidates = [f"name{i}" for i in range(20)]
        shuffled = candidates[:]
        random.Random(7).shuffle(shuffled)
        registry = NameRegistry("_")
        self.assertEqual([registry.add_name(c) for c in shuffled], shuffled)

    def test_size_grows_by_one_per_call(self) -> None:
        registry = NameRegistry("_")
        for expected, candidate in enumerate(["a", "a", "", "", "a_0", "b"], 1):
            registry.add_name(candidate)
            self.assertEqual(len(registry), expected)

    def test_all_names_unique_and_match_naive_rescan(self) -> None:
        rng = random.Random(1234)
        pool = ["", "a", "b", "a_0", "a_1", "_0", "b_"]
        registry = NameRegistry(separator="_", empty_marker="")
        issued: frozenset[str] = frozenset()
        returned = []
        for _ in range(300):
            candidate = rng.choice(pool)
            prefix = rng.choice([None, *pool])
            name = registry.add_name(candidate, prefix)
            expected, issued = uniquify(issued, candidate, prefix, "_", "")
            self.assertEqual(name, expected)
            returned.append(name)
        self.assertEqual(len(returned), len(set(returned)))
        self.assertEqual(registry.issued, issued)

    def test_prefix_and_empty_marker_sharing_a_base_share_numbering(self) -> None:
        registry = NameRegistry(separator="_", empty_marker="x_")
        issued: frozenset[str] = frozenset()
        names = []
        for candidate, prefix in [("x", "x"), ("x", "x"), ("", ""), ("x", "x"), ("", ""), ("", "")]:
            name = registry.add_name(candidate, prefix)
            expected, issued = uniquify(issued, candidate, prefix, "_", "x_")
            self.assertEqual(name, expected)
            names.append(name)
        self.assertEqual(names, ["x", "x_0", "x_1", "x_2", "x_3", "x_4"])

    def test_exhaustion_raises_and_issues_nothing(self) -> None:
        registry = NameRegistry("_", max_suffix=1)
        registry.add_name("")
        registry.add_name("")
        before = registry.issued
        with self.assertRaises(NameExhaustedError):
            registry.add_name("")
        self.assertEqual(registry.issued, before)
        # other bases are unaffected
        self.assertEqual(registry.add_name("x"), "x")

    def test_add_names_accepts_strings_and_pairs(self) -> None:
        registry = NameRegistry("_")
        names = registry.add_names(["a", ("a", "b"), "", ("", "")])
        self.assertEqual(names, ["a", "b_0", "_0", "_1"])

    def test_reserve_blocks_later_candidates(self) -> None:
        registry = NameRegistry("_")
        self.assertTrue(registry.reserve("foo"))
        self.assertFalse(registry.reserve("foo"))
        self.assertEqual(registry.add_name("foo"), "foo_0")

    def test_reserve_rejects_empty_name(self) -> None:
        with self.assertRaises(ValueError):
            NameRegistry().reserve("")

    def test_issued_snapshot_is_detached(self) -> None:
        registry = NameRegistry()
        snapshot = registry.issued
        registry.add_name("a")
        self.assertEqual(snapshot, frozenset())
        self.assertEqual(list(registry), ["a"])

    def test_from_settings(self) -> None:
        registry = NameRegistry.from_settings(
            RegistrySettings(separator=".", empty_marker="tmp")
        )
        self.assertEqual(registry.separator, ".")
        self.assertEqual(registry.empty_marker, "tmp")
        self.assertEqual(registry.add_name(""), "tmp0")

    def test_independent_registries_do_not_share_state(self) -> None:
        first = NameRegistry()
        second = NameRegistry()
        first.add_name("a")
        self.assertEqual(second.add_name("a"), "a")


if __name__ == "__main__":
    unittest.main()
