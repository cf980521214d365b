import numpy as np

from studbook.ancestry import AncestryCache
from studbook.kinship import alc, coi, cor, cor_of_parents, trial_mating
from studbook.records import AncestryIndex
from .fixtures import full_pedigree, litter, unrelated


def test_coi_shared_grandsire():
    idx = AncestryIndex.build(litter)
    # A = {Max, Luna}, B = {Max, Daisy}: 1/2 * 25
    assert np.isclose(coi(idx.lookup("Pup"), idx, 2), 12.5)


def test_coi_capped_and_zero_without_parents():
    idx = AncestryIndex.build(litter + [
        {"Name": "Inbred", "Sire": "Rex", "Dam": "Rex"},
        {"Name": "Half", "Sire": "Rex"},
    ])
    # одинаковые множества предков → ровно потолок
    assert np.isclose(coi(idx.lookup("Inbred"), idx, 3), 25.0)
    assert coi(idx.lookup("Half"), idx, 3) == 0
    assert coi(idx.lookup("Max"), idx, 3) == 0
    assert coi(None, idx, 3) == 0


def test_alc():
    idx = AncestryIndex.build(litter)
    pup = idx.lookup("Pup")
    # 5 различных предков из 2**3 - 2 = 6 мест
    assert np.isclose(alc(pup, idx, 3), 5 / 6)
    assert alc(pup, idx, 1) == 0
    assert alc(pup, idx, 0) == 0
    assert alc(idx.lookup("Max"), idx, 5) == 0


def test_alc_full_pedigree_is_one():
    idx = AncestryIndex.build(full_pedigree(6))
    assert np.isclose(alc(idx.lookup("Root"), idx, 6), 1.0)


def test_cor_jaccard():
    idx = AncestryIndex.build(litter)
    rex, bella = idx.lookup("Rex"), idx.lookup("Bella")
    assert np.isclose(cor(rex, bella, idx, 2), 1 / 3)
    assert np.isclose(cor(rex, bella, idx, 2, percent=True), 100 / 3)
    assert np.isclose(cor_of_parents(idx.lookup("Pup"), idx, 2), 1 / 3)


def test_cor_unrelated_is_zero():
    idx = AncestryIndex.build(unrelated)
    x, y = idx.lookup("X"), idx.lookup("Y")
    assert cor(x, y, idx, 3) == 0
    assert cor(x, None, idx, 3) == 0


def test_cor_no_ancestors_is_zero():
    idx = AncestryIndex.build(litter)
    assert cor(idx.lookup("Max"), idx.lookup("Luna"), idx, 5) == 0
    assert cor_of_parents(idx.lookup("Max"), idx, 5) == 0


def test_cached_results_match_uncached():
    idx = AncestryIndex.build(litter)
    cache = AncestryCache()
    pup, rex, bella = idx.lookup("Pup"), idx.lookup("Rex"), idx.lookup("Bella")
    for _ in range(2):
        assert coi(pup, idx, 3, cache) == coi(pup, idx, 3)
        assert alc(pup, idx, 3, cache) == alc(pup, idx, 3)
        assert cor(rex, bella, idx, 3, cache) == cor(bella, rex, idx, 3)


def test_trial_mating():
    idx = AncestryIndex.build(litter)
    result = trial_mating(idx.lookup("Rex"), idx.lookup("Bella"), idx, 2)
    assert result.offspring.name == "Trial Pup"
    assert result.offspring.sire == "Rex" and result.offspring.dam == "Bella"
    assert idx.lookup("Trial Pup") is None
    assert np.isclose(result.coi, 12.5)
    assert np.isclose(result.alc, 1.0)
    assert np.isclose(result.cor, 100 / 3)


def test_trial_mating_missing_parent():
    idx = AncestryIndex.build(litter)
    result = trial_mating(idx.lookup("Rex"), None, idx, 3)
    assert (result.coi, result.alc, result.cor) == (0.0, 0.0, 0.0)
