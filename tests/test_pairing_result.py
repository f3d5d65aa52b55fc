from partnerpairing.models.pairing import PairingResult


def test_groups_merge_solo_into_last_pair():
    result = PairingResult(pairs=[("Ann", "Bo"), ("Cy", "Di")], solo="Ed", total_score=1)

    assert result.groups() == [("Ann", "Bo"), ("Cy", "Di", "Ed")]
    assert result.has_trio


def test_groups_without_solo():
    result = PairingResult(pairs=[("Ann", "Bo")])

    assert result.groups() == [("Ann", "Bo")]
    assert not result.has_trio


def test_solo_alone_forms_single_group():
    result = PairingResult(solo="Ann")

    assert result.groups() == [("Ann",)]
    assert result.participants() == ["Ann"]
    assert result.persistable_pairs() == []
    assert not result.has_trio


def test_persistable_pairs_are_canonical_and_exclude_solo():
    result = PairingResult(pairs=[("Bo", "Ann"), ("Cy", "Di")], solo="Ed")

    assert result.persistable_pairs() == [("Ann", "Bo"), ("Cy", "Di")]
    assert result.participants() == ["Bo", "Ann", "Cy", "Di", "Ed"]


def test_result_dict_round_trip():
    result = PairingResult(pairs=[("Bo", "Ann")], solo="Cy", total_score=2, iterations=50)

    assert PairingResult.from_dict(result.to_dict()) == result
