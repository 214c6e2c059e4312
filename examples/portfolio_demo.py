"""
Portfolio demo using folio-core and the reporting helpers.

Demonstrates: load CSV quotes → build a portfolio → value, rebalance → save/load → report.
"""

import logging
import tempfile
from pathlib import Path

from folio_core import PortfolioRegistry
from reporting import CsvQuoteSource, print_report


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # One CSV per ticker under examples/data
    source = CsvQuoteSource(Path(__file__).resolve().parent / "data")

    registry = PortfolioRegistry()
    for symbol in ("AAPL", "MSFT"):
        registry.fetch_series(symbol, source)

    registry.create("retirement")
    registry.add_stock("retirement", "AAPL", 20)
    registry.add_stock("retirement", "MSFT", 5)

    day = "2024-01-05"
    print(f"Value on {day}: ${registry.get_value('retirement', day):,.2f}")
    for symbol, pct in registry.get_value_distribution("retirement", day).items():
        print(f"  {symbol}: {pct:.1f}%")

    # Equal weights across everything held
    registry.rebalance("retirement", {"ALL": 1.0}, day)
    print("After rebalance:", registry.get_composition("retirement"))

    crossovers = registry.get_series("AAPL").get_crossovers("2024-01-02", "2024-01-12", 3)
    print("AAPL 3-day crossovers:", [d.isoformat() for d in crossovers])

    # Round-trip through a file; prices come back from the registry's stored series
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "retirement.txt"
        registry.save("retirement", path)
        portfolio = registry.load(path, replace=True)

    print_report(portfolio, "2024-01-02", "2024-01-12")


if __name__ == "__main__":
    main()
