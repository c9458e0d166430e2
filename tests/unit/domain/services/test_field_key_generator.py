"""Unit tests for internal field key generation."""

from unittest.mock import patch

import pytest

from flexdata.domain.services.field_key_generator import (
    FieldKeyExhaustedError,
    FieldKeyGenerator,
)
from flexdata.domain.services.schema_validator import FIELD_KEY_PATTERN


def test_generated_key_format():
    for _ in range(50):
        assert FIELD_KEY_PATTERN.match(FieldKeyGenerator.generate())


def test_generate_unique_skips_taken_keys():
    with patch.object(
        FieldKeyGenerator, "generate", side_effect=["fld_aaaaaaaa", "fld_bbbbbbbb"]
    ):
        assert FieldKeyGenerator.generate_unique({"fld_aaaaaaaa"}) == "fld_bbbbbbbb"


def test_generate_unique_gives_up():
    with patch.object(FieldKeyGenerator, "generate", return_value="fld_aaaaaaaa"):
        with pytest.raises(FieldKeyExhaustedError):
            FieldKeyGenerator.generate_unique({"fld_aaaaaaaa"})
