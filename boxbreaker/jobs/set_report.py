"""
Build EV reports for every booster set.

Reads the catalog, pack model and price files from the configured data
directory and logs one line per set. Run this job after refreshing the
price files.
"""

import logging

from boxbreaker.analysis.report import SetReport, build_set_report
from boxbreaker.config import settings
from boxbreaker.services.data_store import (
    load_catalog,
    load_pack_model,
    load_price_sources,
    load_sealed_prices,
)
from boxbreaker.services.printing_expander import expand_printings
from boxbreaker.services.release_groups import list_release_groups

logger = logging.getLogger(__name__)


def run_set_reports(scenario: str = "base") -> list[SetReport]:
    """
    Build a report for each booster set in the catalog.

    Args:
        scenario: Pack model scenario to apply

    Returns:
        Reports in release order. Promo and convention sets are skipped.
    """
    cards = load_catalog()
    pack_model = load_pack_model()
    sources = load_price_sources()
    sealed = load_sealed_prices()
    printings = expand_printings(cards)

    logger.info(
        "Expanded %d cards into %d printings using %d price sources",
        len(cards),
        len(printings),
        len(sources),
    )

    reports: list[SetReport] = []
    for group in list_release_groups(cards):
        if not group.is_booster_product:
            continue

        report = build_set_report(
            printings,
            sources,
            pack_model,
            group.code,
            scenario=scenario,
            simulation_trials=settings.simulation_trials,
            sealed_prices=sealed,
        )
        logger.info(report.status_message())
        reports.append(report)

    return reports


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_set_reports()


if __name__ == "__main__":
    main()
