from jobhttpd.util.hashing import hash_text

ABC_DIGEST = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_hash_consistency():
    first = hash_text("abc")
    second = hash_text("abc")
    assert first == second
    assert first == ABC_DIGEST


def test_hash_known_values():
    assert hash_text("abc") == ABC_DIGEST
    assert hash_text("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_hash_differs_for_different_input():
    assert hash_text("abc") != hash_text("abd")
    assert len(hash_text("abd")) == 64