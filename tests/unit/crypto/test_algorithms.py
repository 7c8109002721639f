"""Tests for signature computation and algorithm metadata."""

import hashlib
import hmac

import pytest

from jwtseal.core.errors import UnsupportedAlgorithmError
from jwtseal.crypto.algorithms import sign, signatures_match
from jwtseal.crypto.encoding import b64url_encode
from jwtseal.crypto.secret import Secret
from jwtseal.crypto.types import Algorithm

SIGNING_INPUT = (
    b"eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    b"eyJzdWIiOjEyMzQ1Njc4OTAsIm5hbWUiOiJKb2huIERvZSIsImFkbWluIjp0cnVlfQ"
)


class TestSign:
    """Tests for the signing dispatch."""

    def test_hs256_known_vector(self) -> None:
        sig = sign(Algorithm.HS256, SIGNING_INPUT, Secret("secret"))
        assert b64url_encode(sig) == "eoaDVGTClRdfxUZXiPs3f8FmJDkDE_VCQFXqKxpLsts"

    @pytest.mark.parametrize(
        ("algorithm", "digest"),
        [
            (Algorithm.HS256, hashlib.sha256),
            (Algorithm.HS384, hashlib.sha384),
            (Algorithm.HS512, hashlib.sha512),
        ],
    )
    def test_hmac_matches_stdlib(self, algorithm: Algorithm, digest) -> None:
        sig = sign(algorithm, b"payload", Secret(b"k"))
        assert sig == hmac.new(b"k", b"payload", digest).digest()
        assert len(sig) == algorithm.digest_size

    def test_none_produces_empty_signature(self) -> None:
        assert sign(Algorithm.NONE, SIGNING_INPUT, Secret("ignored")) == b""

    @pytest.mark.parametrize(
        "algorithm",
        [Algorithm.RS256, Algorithm.ES384, Algorithm.PS512],
    )
    def test_unimplemented_algorithm_raises(self, algorithm: Algorithm) -> None:
        with pytest.raises(UnsupportedAlgorithmError):
            sign(algorithm, SIGNING_INPUT, Secret("secret"))


class TestAlgorithmMetadata:
    """Tests for algorithm introspection."""

    def test_wire_values(self) -> None:
        assert Algorithm("none") is Algorithm.NONE
        assert Algorithm("HS384") is Algorithm.HS384
        assert Algorithm.PS256.value == "PS256"

    def test_implemented_set(self) -> None:
        implemented = {a for a in Algorithm if a.is_implemented}
        assert implemented == {
            Algorithm.NONE,
            Algorithm.HS256,
            Algorithm.HS384,
            Algorithm.HS512,
        }

    def test_hash_names(self) -> None:
        assert Algorithm.HS512.hash_name == "sha512"
        assert Algorithm.NONE.hash_name is None
        assert Algorithm.RS256.digest_size is None
        assert Algorithm.NONE.digest_size == 0


class TestSignaturesMatch:
    """Tests for constant-time signature comparison."""

    def test_equal(self) -> None:
        assert signatures_match("abc-_", "abc-_")

    def test_unequal(self) -> None:
        assert not signatures_match("abc", "abd")
        assert not signatures_match("abc", "")

    def test_non_ascii_input_is_a_mismatch(self) -> None:
        assert not signatures_match("abc", "abç")


class TestCatalogConsistency:
    """Metadata and signing must agree on what is implemented."""

    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_is_implemented_matches_sign(self, algorithm: Algorithm) -> None:
        if algorithm.is_implemented:
            sig = sign(algorithm, b"payload", Secret("k"))
            assert len(sig) == algorithm.digest_size
        else:
            with pytest.raises(UnsupportedAlgorithmError):
                sign(algorithm, b"payload", Secret("k"))
