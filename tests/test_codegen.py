"""Tests for the ingredients build step."""

import json
from pathlib import Path

import pytest

from perfume.codegen import PREFIX_SEED, CodegenError, PopulationSize, ingredients
from perfume.identity.population import Ingredients, all_storage_keys
from perfume.utils.shuffle import randomized
from perfume.utils.words import read_words


def write_words(path: Path, words: list[str]) -> Path:
    path.write_text("\n".join(words) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def word_files(tmp_path: Path) -> dict[str, Path]:
    """Enough words for the BHUTAN size: 178 pairs per key."""
    return {
        "prefixes": write_words(tmp_path / "prefixes.txt", [f"word{i}" for i in range(4100)]),
        "colors": write_words(tmp_path / "colors.txt", [f"color{i}" for i in range(10)]),
        "animals": write_words(tmp_path / "animals.txt", [f"animal{i}" for i in range(18)]),
    }


class TestPopulationSize:
    def test_from_string(self):
        assert PopulationSize.from_string("bhutan") is PopulationSize.BHUTAN
        assert PopulationSize.from_string(" Brazil ") is PopulationSize.BRAZIL

    def test_from_string_invalid(self):
        with pytest.raises(ValueError, match="bhutan, belgium, brazil"):
            PopulationSize.from_string("monaco")

    def test_per_key(self):
        assert PopulationSize.BHUTAN.per_key == 178
        assert PopulationSize.BELGIUM.per_key == 2867
        assert PopulationSize.BRAZIL.per_key == 49581


class TestIngredients:
    """Compiling word lists."""

    def test_writes_loadable_table(self, tmp_path: Path, word_files):
        out = tmp_path / "out" / "bhutan.json"

        table = ingredients(PopulationSize.BHUTAN, output=out, **word_files)

        assert table.capacity == PopulationSize.BHUTAN.value
        assert table.offsets_per_key == 178
        assert list(table.colors) == [f"color{i}" for i in range(10)]
        assert Ingredients.load(out).to_dict() == table.to_dict()
        assert json.loads(out.read_text())["capacity"] == PopulationSize.BHUTAN.value

    def test_prefixes_use_seeded_shuffle_of_first_words(self, tmp_path: Path, word_files):
        table = ingredients(PopulationSize.BHUTAN, output=tmp_path / "out.json", **word_files)

        expected = randomized(read_words(word_files["prefixes"])[:4096], PREFIX_SEED)
        assert [table.prefixes[key] for key in all_storage_keys()] == expected
        assert "word4099" not in table.prefixes.values()

    def test_is_reproducible(self, tmp_path: Path, word_files):
        first = ingredients(PopulationSize.BHUTAN, output=tmp_path / "a.json", **word_files)
        second = ingredients(PopulationSize.BHUTAN, output=tmp_path / "b.json", **word_files)
        assert (tmp_path / "a.json").read_text() == (tmp_path / "b.json").read_text()
        assert first.to_dict() == second.to_dict()

    def test_too_few_prefixes(self, tmp_path: Path, word_files):
        write_words(word_files["prefixes"], [f"word{i}" for i in range(100)])
        with pytest.raises(CodegenError, match="4096 needed"):
            ingredients(PopulationSize.BHUTAN, output=tmp_path / "out.json", **word_files)

    def test_too_few_pairs(self, tmp_path: Path, word_files):
        with pytest.raises(CodegenError, match="2867 needed"):
            ingredients(PopulationSize.BELGIUM, output=tmp_path / "out.json", **word_files)
        assert not (tmp_path / "out.json").exists()

    def test_duplicate_colors(self, tmp_path: Path, word_files):
        write_words(word_files["colors"], ["red"] * 20)
        with pytest.raises(CodegenError, match="duplicate"):
            ingredients(PopulationSize.BHUTAN, output=tmp_path / "out.json", **word_files)

    def test_duplicate_prefixes(self, tmp_path: Path, word_files):
        write_words(word_files["prefixes"], ["same"] * 4096)
        with pytest.raises(CodegenError, match="unique"):
            ingredients(PopulationSize.BHUTAN, output=tmp_path / "out.json", **word_files)


class TestRandomized:
    def test_is_a_permutation(self):
        words = [f"w{i}" for i in range(50)]
        shuffled = randomized(words, 7)
        assert sorted(shuffled) == sorted(words)
        assert shuffled != words

    def test_depends_only_on_seed(self):
        words = ["a", "b", "c", "d", "e"]
        assert randomized(words, 1) == randomized(list(words), 1)

    def test_duplicates_appear_once(self):
        assert sorted(randomized(["a", "a", "b"], 3)) == ["a", "b"]


def test_read_words_skips_blank_lines(tmp_path: Path):
    path = tmp_path / "words.txt"
    path.write_text("  red\n\nblue \n\n", encoding="utf-8")
    assert read_words(path) == ["red", "blue"]
