"""Tests for the taxonomy registry."""

import pytest

from credit_scrutiny.domain.taxonomy import (
    CreditScoreBand,
    PriorityBand,
    SubIndustryOption,
    TaxonomyRegistry,
    credit_score_band,
    priority_band,
)
from credit_scrutiny.exceptions import EmptyTaxonomyError, TaxonomyValidationError
from tests.support.taxonomy import make_entry


class TestListing:
    def test_get_sectors_is_sorted_and_unique(self, small_registry: TaxonomyRegistry) -> None:
        assert small_registry.get_sectors() == [
            "Agriculture & Agribusiness",
            "Energy & Utilities",
        ]

    def test_get_industries_filters_by_sector(self, small_registry: TaxonomyRegistry) -> None:
        assert small_registry.get_industries("Energy & Utilities") == [
            "Power generation",
            "Renewables",
        ]
        assert small_registry.get_industries("Agriculture & Agribusiness") == ["Crop farming"]

    @pytest.mark.parametrize("sector", ["", None, "Unknown sector"])
    def test_get_industries_empty_or_unknown_sector(
        self, small_registry: TaxonomyRegistry, sector: str | None
    ) -> None:
        assert small_registry.get_industries(sector) == []

    def test_get_sub_industries_sorted_by_name_ignoring_case(
        self, small_registry: TaxonomyRegistry
    ) -> None:
        assert small_registry.get_sub_industries("Renewables") == [
            SubIndustryOption(name="biogas plants", score=5, points=2),
            SubIndustryOption(name="Solar farms", score=3, points=4),
        ]

    def test_get_sub_industries_unknown_industry(self, small_registry: TaxonomyRegistry) -> None:
        assert small_registry.get_sub_industries("Unknown") == []
        assert small_registry.get_sub_industries("") == []


class TestLookup:
    def test_get_taxonomy_info_exact_match(self, small_registry: TaxonomyRegistry) -> None:
        entry = small_registry.get_taxonomy_info("Cogeneration")

        assert entry is not None
        assert entry.industry == "Power generation"
        assert entry.points == 3

    def test_get_taxonomy_info_is_case_sensitive(self, small_registry: TaxonomyRegistry) -> None:
        assert small_registry.get_taxonomy_info("cogeneration") is None

    def test_find_taxonomy_prefers_sub_industry(self, small_registry: TaxonomyRegistry) -> None:
        entry = small_registry.find_taxonomy(
            sector="Agriculture & Agribusiness",
            industry="Renewables",
            sub_industry="IPP - thermal",
        )

        assert entry is not None
        assert entry.sub_industry == "IPP - thermal"

    def test_find_taxonomy_industry_returns_first_in_table_order(
        self, small_registry: TaxonomyRegistry
    ) -> None:
        entry = small_registry.find_taxonomy(industry="Renewables")

        assert entry is not None
        assert entry.sub_industry == "Solar farms"

    def test_find_taxonomy_sector_only(self, small_registry: TaxonomyRegistry) -> None:
        entry = small_registry.find_taxonomy(sector="Agriculture & Agribusiness")

        assert entry is not None
        assert entry.sub_industry == "Rice cultivation"

    def test_find_taxonomy_unknown_sub_industry_does_not_fall_through(
        self, small_registry: TaxonomyRegistry
    ) -> None:
        assert small_registry.find_taxonomy(industry="Renewables", sub_industry="Nope") is None

    def test_find_taxonomy_nothing_supplied(self, small_registry: TaxonomyRegistry) -> None:
        assert small_registry.find_taxonomy() is None
        assert small_registry.find_taxonomy("", "", "") is None

    def test_resolve_base_entry_falls_through_stale_labels(
        self, small_registry: TaxonomyRegistry
    ) -> None:
        by_industry = small_registry.resolve_base_entry(
            sector="Energy & Utilities", industry="Renewables", sub_industry="Retired label"
        )
        by_sector = small_registry.resolve_base_entry(
            sector="Agriculture & Agribusiness", industry="Retired industry"
        )

        assert by_industry is not None
        assert by_industry.sub_industry == "Solar farms"
        assert by_sector is not None
        assert by_sector.sub_industry == "Rice cultivation"

    def test_resolve_base_entry_unclassified(self, small_registry: TaxonomyRegistry) -> None:
        assert small_registry.resolve_base_entry(None, None, None) is None
        assert small_registry.resolve_base_entry("Mining", "Coal", "Open pit") is None


class TestBundledTaxonomy:
    def test_bundled_taxonomy_shape(self, registry: TaxonomyRegistry) -> None:
        assert len(registry) == 181
        assert len(registry.get_sectors()) == 18
        assert "Energy & Utilities" in registry.get_sectors()

    def test_bundled_data_center_leaf(self, registry: TaxonomyRegistry) -> None:
        entry = registry.get_taxonomy_info("Hyperscale / cloud campuses")

        assert entry is not None
        assert entry.sector == "Technology & Electronics/ICT"
        assert entry.industry == "Data centers & cloud"
        assert entry.points == 5
        assert entry.score == 2

    def test_bundled_power_generation_options(self, registry: TaxonomyRegistry) -> None:
        names = [option.name for option in registry.get_sub_industries("Power generation")]

        assert names == ["Cogeneration", "IPP - renewable", "IPP - thermal"]

    def test_every_sub_industry_resolves_to_itself(self, registry: TaxonomyRegistry) -> None:
        for entry in registry:
            assert registry.get_taxonomy_info(entry.sub_industry) == entry
            assert (
                registry.find_taxonomy(entry.sector, entry.industry, entry.sub_industry)
                == registry.find_taxonomy(sub_industry=entry.sub_industry)
                == entry
            )

    def test_every_industry_belongs_to_its_sector(self, registry: TaxonomyRegistry) -> None:
        for sector in registry.get_sectors():
            for industry in registry.get_industries(sector):
                options = registry.get_sub_industries(industry)
                assert options
                for option in options:
                    entry = registry.get_taxonomy_info(option.name)
                    assert entry is not None
                    assert entry.sector == sector


class TestValidation:
    def test_empty_registry_fails_loudly(self) -> None:
        with pytest.raises(EmptyTaxonomyError):
            TaxonomyRegistry(())

    def test_duplicate_sub_industry_rejected(self) -> None:
        with pytest.raises(TaxonomyValidationError) as exc_info:
            TaxonomyRegistry((make_entry("Solar"), make_entry("Solar", industry="Other")))

        assert "duplicate sub-industry 'Solar'" in str(exc_info.value)

    def test_industry_shared_between_sectors_rejected(self) -> None:
        with pytest.raises(TaxonomyValidationError) as exc_info:
            TaxonomyRegistry(
                (
                    make_entry("Solar", sector="Energy & Utilities"),
                    make_entry("Wind", sector="Public Sector"),
                )
            )

        assert "Power generation" in str(exc_info.value)

    @pytest.mark.parametrize(("score", "points"), [(0, 3), (11, 3), (5, 0), (5, 6)])
    def test_out_of_range_values_rejected(self, score: int, points: int) -> None:
        with pytest.raises(TaxonomyValidationError):
            TaxonomyRegistry((make_entry("Solar", score=score, points=points),))

    def test_blank_label_rejected(self) -> None:
        with pytest.raises(TaxonomyValidationError):
            TaxonomyRegistry((make_entry("   "),))

    def test_registry_entries_are_immutable(self, small_registry: TaxonomyRegistry) -> None:
        entry = small_registry.entries[0]

        with pytest.raises(AttributeError):
            entry.points = 1  # type: ignore[misc]
        assert isinstance(small_registry.entries, tuple)


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (1, CreditScoreBand.EXCELLENT),
        (2, CreditScoreBand.EXCELLENT),
        (3, CreditScoreBand.STRONG),
        (4, CreditScoreBand.STRONG),
        (6, CreditScoreBand.MODERATE),
        (8, CreditScoreBand.WEAK),
        (9, CreditScoreBand.POOR),
        (10, CreditScoreBand.POOR),
    ],
)
def test_credit_score_band(score: int, expected: CreditScoreBand) -> None:
    assert credit_score_band(score) is expected


@pytest.mark.parametrize(
    ("points", "expected"),
    [
        (5, PriorityBand.TOP),
        (4, PriorityBand.HIGH),
        (3, PriorityBand.MEDIUM),
        (2, PriorityBand.LOW),
        (1, PriorityBand.LOW),
    ],
)
def test_priority_band(points: int, expected: PriorityBand) -> None:
    assert priority_band(points) is expected
