"""Tests for DataValidator."""
import pytest

from diary.core.exceptions import ValidationError
from diary.core.validators import DataValidator


class TestValidateContent:
    """Tests for entry body validation."""

    def test_accepts_text(self):
        assert DataValidator.validate_content("  hello ") == "  hello "

    @pytest.mark.parametrize("value", ["", "   ", "\n\t", None, 42])
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            DataValidator.validate_content(value)


class TestValidatePage:
    """Tests for pagination arguments."""

    def test_accepts_positive(self):
        DataValidator.validate_page(1, 1)

    @pytest.mark.parametrize("page,per_page", [(0, 1), (1, 0), (-5, 10)])
    def test_rejects_non_positive(self, page, per_page):
        with pytest.raises(ValidationError, match="must be positive"):
            DataValidator.validate_page(page, per_page)


class TestNormalizeBool:
    """Tests for boolean normalization."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, True),
            (False, False),
            (1, True),
            (0, False),
            (None, None),
        ],
    )
    def test_converts(self, value, expected):
        assert DataValidator.normalize_bool(value) is expected

    @pytest.mark.parametrize("value", [7, -1, "true", 1.0])
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            DataValidator.normalize_bool(value)
