import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from colorama import Fore

from config import LOG_LEVEL, INTERESTING_TOKENS_PATH, get_enabled_chains, get_chain_policies
from analysis import TokenAnalyzer, FatalSourceError, Candidate
from offchain import DexScreenerAPI, RugCheckAPI
from storage import TokenStorage
import reporter

logger = logging.getLogger(__name__)


class DexScreenerBot:
    """
    One scan pass: fetch latest listings, classify, store winners.

    By default only the most recent candidate of each enabled chain is
    analyzed. Candidates are evaluated one at a time.
    """

    def __init__(self, chains: Optional[List[str]] = None, storage_path: str = None,
                 analyze_all: bool = False, dex_screener=None, trust_source=None, storage=None):
        self.chains = [c.lower() for c in (chains or get_enabled_chains())]
        self.analyze_all = analyze_all

        self.dex_screener = dex_screener or DexScreenerAPI({'supported_chains': self.chains})
        self.trust_source = trust_source or RugCheckAPI()
        self.analyzer = TokenAnalyzer(self.trust_source, chain_policies=get_chain_policies())
        self.storage = storage or TokenStorage(storage_path or INTERESTING_TOKENS_PATH)

        self.winners_found = 0

    def select_candidates(self, candidates: List[Candidate]) -> List[Candidate]:
        if self.analyze_all:
            return [c for c in candidates if c.chain_id.lower() in self.chains]

        selected = []
        for chain in self.chains:
            first = next((c for c in candidates if c.chain_id.lower() == chain), None)
            if first:
                selected.append(first)
        return selected

    async def analyze_candidate(self, candidate: Candidate):
        print(f"Analyzing {candidate.chain_id} token: {candidate.token_address}")

        pools = []
        if self.analyzer.validator.validate(candidate) is None:
            pools = await self.dex_screener.fetch_token_pools(candidate.chain_id, candidate.token_address)

        result = await self.analyzer.analyze(candidate, pools)
        reporter.print_analysis(result)

        if result.accepted and self.storage.save_token(result.classification):
            self.winners_found += 1
            reporter.print_winner(result.classification)
        return result

    async def analyze_all_chains(self):
        """
        Raises:
            FatalSourceError: listing source unusable, the run cannot continue
        """
        print("Fetching latest listed tokens...")
        latest = await self.dex_screener.fetch_latest_pairs()

        to_analyze = self.select_candidates(latest)
        print(f"Found tokens to analyze: {len(to_analyze)}")

        results = []
        for candidate in to_analyze:
            try:
                results.append(await self.analyze_candidate(candidate))
            except Exception as e:
                # One bad candidate never aborts the batch
                logger.error(f"Error analyzing token {candidate.token_address}: {e}")

        reporter.print_summary(self.analyzer.get_stats(), self.winners_found)
        return results

    async def close(self):
        await self.dex_screener.close()
        await self.trust_source.close()

    async def start(self) -> int:
        reporter.print_banner()
        try:
            await self.analyze_all_chains()
        except FatalSourceError as e:
            print(f"{Fore.RED}Critical error in analysis: {e}")
            return 1
        finally:
            await self.close()

        print("Analysis complete. Exiting...")
        return 0


async def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="DexScreener new listing scanner")
    parser.add_argument("--chains", nargs="+", help="Chains to scan (default: enabled chains in chains.yaml)")
    parser.add_argument("--storage", default=INTERESTING_TOKENS_PATH, help="Path of the interesting tokens JSON file")
    parser.add_argument("--all", action="store_true", dest="analyze_all",
                        help="Analyze every listed token instead of the newest per chain")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    bot = DexScreenerBot(chains=args.chains, storage_path=args.storage, analyze_all=args.analyze_all)
    return await bot.start()


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
