"""Unit tests for clamp_page."""

import pytest

from breedlink.helpers.paging_helper import clamp_page


class TestClampPage:
    @pytest.mark.unit
    def test_defaults_when_nothing_requested(self) -> None:
        assert clamp_page(None, None, 20, 100) == (0, 20)

    @pytest.mark.unit
    def test_negative_skip_becomes_zero(self) -> None:
        assert clamp_page(-5, 10, 20, 100) == (0, 10)

    @pytest.mark.unit
    def test_zero_limit_uses_default(self) -> None:
        assert clamp_page(0, 0, 20, 100) == (0, 20)

    @pytest.mark.unit
    def test_limit_capped_at_max(self) -> None:
        assert clamp_page(40, 1000, 20, 100) == (40, 100)
