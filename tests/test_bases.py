import pytest

from genocoord.utils.bases import (CanonicalBases, are_canonical_bases, find_non_canonical_base,
                                   is_canonical_base)

BOTH_MODES = [CanonicalBases.ACGT, CanonicalBases.ACGTN]


@pytest.mark.parametrize("canon", BOTH_MODES)
@pytest.mark.parametrize("bases", ["A", "C", "G", "T", "AA", "AC", "AG", "AT", "ACGT"])
def test_upper_case_bases_are_canonical(bases, canon):
    assert are_canonical_bases(bases, canon)


@pytest.mark.parametrize("canon", BOTH_MODES)
@pytest.mark.parametrize("bases", ["a", "c", "g", "t", "Aa", "aA", "R", "n"])
def test_lower_case_and_iupac_bases_are_not_canonical(bases, canon):
    assert not are_canonical_bases(bases, canon)


@pytest.mark.parametrize("bases", ["N", "AN", "NA", "ANC"])
def test_n_depends_on_mode(bases):
    assert not are_canonical_bases(bases)
    assert are_canonical_bases(bases, CanonicalBases.ACGTN)


@pytest.mark.parametrize("bad_pos", range(10))
def test_reports_first_bad_index(bad_pos):
    bases = list("ACGTACGTACGT")
    bases[bad_pos] = 'R'
    bases = ''.join(bases)
    assert not are_canonical_bases(bases)
    assert find_non_canonical_base(bases) == bad_pos


def test_first_of_several_bad_bases_is_reported():
    assert find_non_canonical_base("ACxGTy") == 2
    assert find_non_canonical_base("ACGT") is None


def test_empty_bases_is_an_error():
    with pytest.raises(ValueError, match="bases cannot be empty"):
        are_canonical_bases("")
    with pytest.raises(ValueError, match="bases cannot be empty"):
        find_non_canonical_base("", CanonicalBases.ACGTN)


def test_is_canonical_base():
    for canon in BOTH_MODES:
        for base in "ACGT":
            assert is_canonical_base(base, canon)
            assert not is_canonical_base(base.lower(), canon)
        # lower-case n is never canonical
        assert not is_canonical_base('n', canon)
        assert not is_canonical_base('R', canon)

    assert not is_canonical_base('N', CanonicalBases.ACGT)
    assert is_canonical_base('N', CanonicalBases.ACGTN)
