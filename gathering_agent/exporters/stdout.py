# gathering_agent/exporters/stdout.py - Console output exporter
"""
Prints gathering requests and results to stdout in human-readable format.
"""

from typing import Dict, List
from colorama import Fore, Style, init
import logging

from gathering_agent.gatherers.facts import FactsGathered, FactsGatheringRequest


# Initialize colorama
init(autoreset=True)


class StdoutExporter:
    """
    Prints agent output to stdout with colored output.
    """

    def __init__(self, use_colors: bool = True):
        """
        Initialize the stdout exporter.

        Args:
            use_colors: Whether to use colored output
        """
        self.use_colors = use_colors
        self.logger = logging.getLogger(__name__)

    def print_request(self, request: FactsGatheringRequest):
        """
        Print an aggregated gathering request.

        Args:
            request: FactsGatheringRequest
        """
        print(self._color(f"\nExecution: {request.execution_id} (group {request.group_id})", Fore.GREEN))

        for gatherer, fact_requests in request.facts_requests_by_gatherer.items():
            print(f"  {gatherer}: {len(fact_requests)} fact(s)")
            for fact_request in fact_requests:
                print(f"    - {fact_request.name} [{fact_request.check_id}] {fact_request.argument}")

    def print_gatherers(self, gatherers: List[str]):
        """
        Print the registered gatherers.

        Args:
            gatherers: Lines as returned by GatherersRegistry.list()
        """
        if not gatherers:
            print(self._color("No gatherers registered", Fore.YELLOW))
            return

        print(self._color("Registered gatherers:", Fore.CYAN))
        for line in sorted(gatherers):
            print(f"  {line}")

    def print_facts(self, results: List[FactsGathered]):
        """
        Print the facts gathered for an execution.

        Args:
            results: One FactsGathered per gatherer
        """
        for gathered in results:
            for fact in gathered.facts_gathered:
                if fact.failed:
                    print(self._color(f"  ✗ {fact.name} [{fact.check_id}]: {fact.error.message}", Fore.RED))
                else:
                    print(f"  ✓ {fact.name} [{fact.check_id}]: {fact.value}")

    def print_summary(self, tally: Dict[str, int]):
        """
        Print the consumption summary.

        Args:
            tally: Processed and failed event counts
        """
        color = Fore.RED if tally.get('failed') else Fore.GREEN
        print(self._color(
            f"\nProcessed {tally.get('processed', 0)} event(s), {tally.get('failed', 0)} failed",
            color
        ))

    def _color(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{Style.RESET_ALL}"
