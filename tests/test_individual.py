import random

import pytest

from asciigenetic.individual import (
    ALLOWED_CHARS,
    NON_SPACE_CHARS,
    Individual,
    codes,
)


@pytest.fixture(autouse=True)
def _seeded():
    random.seed(12345)


def _all_allowed(individual):
    return all(c in ALLOWED_CHARS for c in individual.chars)


def test_individual_creation():
    individual = Individual.random(100)
    assert len(individual.chars) == 100
    assert individual.fitness == 0.0
    assert all(0x20 <= c <= 0x7F for c in individual.chars)


def test_random_without_background_has_no_spaces():
    individual = Individual.random(200, 0.0)
    assert b" " not in individual.chars
    assert _all_allowed(individual)


def test_random_full_background_is_all_spaces():
    individual = Individual.random(50, 1.0)
    assert individual.chars == bytearray(b" " * 50)


def test_individual_crossover():
    parent1 = Individual(b"A" * 10)
    parent2 = Individual(b"B" * 10)
    child1, child2 = parent1.crossover(parent2, 1.0)
    assert len(child1.chars) == 10
    assert len(child2.chars) == 10
    assert child1.chars == bytearray(b"B" * 10)
    assert child2.chars == bytearray(b"A" * 10)


def test_crossover_zero_rate_keeps_parents():
    parent1 = Individual(b"AAAA")
    parent2 = Individual(b"BBBB")
    child1, child2 = parent1.crossover(parent2, 0.0)
    assert child1.chars == bytearray(b"AAAA")
    assert child2.chars == bytearray(b"BBBB")
    assert child1.fitness == 0.0


def test_crossover_does_not_modify_parents():
    parent1 = Individual(b"AAAA")
    parent2 = Individual(b"BBBB")
    parent1.crossover(parent2, 1.0)
    assert parent1.chars == bytearray(b"AAAA")
    assert parent2.chars == bytearray(b"BBBB")


def test_crossover_unequal_lengths_swaps_shared_prefix():
    parent1 = Individual(b"AAAAAA")
    parent2 = Individual(b"BBB")
    child1, child2 = parent1.crossover(parent2, 1.0)
    assert child1.chars == bytearray(b"BBBAAA")
    assert child2.chars == bytearray(b"AAA")


def test_crossover_preserves_genes_per_position():
    parent1 = Individual(b"ABCDEFGH")
    parent2 = Individual(b"abcdefgh")
    child1, child2 = parent1.crossover(parent2, 0.5)
    for a, b, c1, c2 in zip(parent1.chars, parent2.chars, child1.chars, child2.chars):
        assert {c1, c2} == {a, b}


def test_individual_mutation():
    individual = Individual(b"A" * 100)
    original = bytearray(individual.chars)
    individual.mutate(1.0)
    assert individual.chars != original
    assert _all_allowed(individual)
    assert b"A" not in individual.chars


def test_mutation_zero_rate_changes_nothing():
    individual = Individual(b"A" * 30)
    individual.mutate(0.0, 0.5)
    assert individual.chars == bytearray(b"A" * 30)


def test_mutation_full_background_gives_spaces():
    individual = Individual(b"#" * 20)
    individual.mutate(1.0, 1.0)
    assert individual.chars == bytearray(b" " * 20)


def test_individual_random_creation_chars_valid():
    for _ in range(10):
        individual = Individual.random(50)
        assert len(individual.chars) == 50
        assert all(c in ALLOWED_CHARS for c in individual.chars)


def test_individual_background_prob_chars_valid():
    for _ in range(10):
        individual = Individual.random(50, 0.5)
        assert len(individual.chars) == 50
        assert all(c in ALLOWED_CHARS for c in individual.chars)


def test_mutation_with_background_prob_chars_valid():
    for _ in range(10):
        individual = Individual(b" " * 50)
        individual.mutate(1.0, 0.3)
        assert len(individual.chars) == 50
        assert all(c in ALLOWED_CHARS for c in individual.chars)


def test_allowed_chars_content():
    digits = [c for c in ALLOWED_CHARS if ord("0") <= c <= ord("9")]
    assert digits == [ord("8")]
    assert b" " not in NON_SPACE_CHARS
    assert len(NON_SPACE_CHARS) == len(ALLOWED_CHARS) - 1
    individual = Individual.random(2000, 0.0)
    generated_digits = {c for c in individual.chars if ord("0") <= c <= ord("9")}
    assert generated_digits <= {ord("8")}
    assert set(individual.chars) <= set(NON_SPACE_CHARS)


def test_debug_character_generation_stress():
    for _ in range(100):
        individual = Individual.random(100, 0.5)
        for c in individual.chars:
            assert c in ALLOWED_CHARS
            assert not (ord("0") <= c <= ord("9") and c != ord("8"))


def test_ascii_art_with_percent_characters():
    individual = Individual(b"%%%@#%$%O")
    assert _all_allowed(individual)
    assert str(individual) == "%%%@#%$%O"
    assert "%" in str(individual)


def test_individual_with_init_char():
    individual = Individual.with_init_char(100, "O")
    assert len(individual.chars) == 100
    o_count = individual.chars.count(ord("O"))
    random_count = sum(1 for c in individual.chars if c != ord("O"))
    assert o_count >= 90
    assert random_count <= 10
    assert o_count + random_count == 100
    assert _all_allowed(individual)


def test_with_init_char_invalid_falls_back_to_space():
    individual = Individual.with_init_char(100, "A")
    assert ord("A") not in individual.chars
    assert individual.chars.count(ord(" ")) >= 90


def test_with_init_char_rejects_multiple_characters():
    with pytest.raises(ValueError):
        Individual.with_init_char(10, "OX")


def test_constructor_accepts_str_and_list():
    assert Individual("Hi! ").chars == bytearray(b"Hi! ")
    assert Individual([72, 105]).chars == bytearray(b"Hi")
    assert codes("ab") == bytearray(b"ab")


def test_zero_size_individual_is_empty():
    assert Individual.random(0, 0.5).chars == bytearray()
    assert Individual.with_init_char(0, "#").chars == bytearray()