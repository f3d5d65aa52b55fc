import itertools

from partnerpairing.models.pairing import canonicalize


def test_canonicalize_orders_lexicographically():
    assert canonicalize("Bo", "Ann") == ("Ann", "Bo")
    assert canonicalize("Ann", "Bo") == ("Ann", "Bo")


def test_canonicalize_is_symmetric():
    names = ["Ann", "ann", "Bo", "Zoe Smith", "Zoe", "", "Émile"]
    for a, b in itertools.product(names, repeat=2):
        assert canonicalize(a, b) == canonicalize(b, a)


def test_identical_names_collide():
    assert canonicalize("Cy", "Cy") == ("Cy", "Cy")
