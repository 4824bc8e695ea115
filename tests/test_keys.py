import pytest

from sepolia_wallet.keys import Credential, create_new, import_from_key
from sepolia_wallet.shared.errors import InvalidKeyFormatError


@pytest.mark.unit
class TestCreateNew:
    def test_creates_checksummed_address_and_prefixed_key(self):
        credential = create_new()
        assert credential.address.startswith("0x")
        assert len(credential.address) == 42
        assert credential.private_key.startswith("0x")
        assert len(credential.private_key) == 66

    def test_keys_are_random(self):
        assert create_new().private_key != create_new().private_key

    def test_created_key_imports_to_same_address(self):
        credential = create_new()
        assert import_from_key(credential.private_key).address == credential.address


@pytest.mark.unit
class TestImportFromKey:
    def test_import_with_prefix(self, private_key, address):
        credential = import_from_key(private_key)
        assert credential.address == address
        assert credential.private_key == private_key

    def test_import_without_prefix_and_with_whitespace(self, private_key, address):
        credential = import_from_key(f"  {private_key[2:].upper()}\n")
        assert credential.address == address
        assert credential.private_key == private_key

    @pytest.mark.parametrize(
        "raw_key",
        [
            "",
            "   ",
            "0x1234",
            "zz" * 32,
            "0x" + "ab" * 33,
        ],
    )
    def test_malformed_keys_are_rejected(self, raw_key):
        with pytest.raises(InvalidKeyFormatError):
            import_from_key(raw_key)

    def test_out_of_range_key_is_rejected(self):
        with pytest.raises(InvalidKeyFormatError):
            import_from_key("0" * 64)

    def test_invalid_key_error_is_value_error(self):
        with pytest.raises(ValueError):
            import_from_key("nope")


@pytest.mark.unit
def test_credential_repr_masks_private_key(credential, private_key):
    text = repr(credential)
    assert private_key not in text
    assert private_key[2:] not in text
    assert credential.address in text


@pytest.mark.unit
def test_credential_is_immutable(credential):
    with pytest.raises(Exception):
        credential.address = "0x0"  # type: ignore[misc]


@pytest.mark.unit
def test_credentials_compare_by_value(private_key, address):
    assert Credential(address, private_key) == Credential(address, private_key)
