import unittest

from analysis.exceptions import NoDataError
from analysis.models import Candidate, PoolSnapshot, SocialLink, MainPoolMetrics, RejectReason
from analysis.validator import InputValidator
from analysis.metrics_extractor import MetricsExtractor
from analysis.anomaly_detector import (
    AnomalyDetector,
    LOW_LIQUIDITY_TO_VOLUME,
    HIGH_VOLUME_FEW_TXNS,
    ONE_SIDED_TRADING,
    EXTREME_PRICE_MOVE,
)
from analysis.social_scorer import SocialScorer
from analysis.threshold_scorer import ThresholdScorer
from config import load_chain_configs, get_chain_policies, get_enabled_chains


def make_candidate(**overrides):
    fields = dict(chain_id="base", token_address="0xabc", url="https://dexscreener.com/base/0xabc")
    fields.update(overrides)
    return Candidate(**fields)


class TestInputValidator(unittest.TestCase):

    def setUp(self):
        self.validator = InputValidator()

    def test_accepts_candidate_with_address(self):
        self.assertIsNone(self.validator.validate(make_candidate()))

    def test_rejects_missing_or_blank_address(self):
        self.assertEqual(self.validator.validate(make_candidate(token_address="")),
                         RejectReason.MISSING_ADDRESS)
        self.assertEqual(self.validator.validate(make_candidate(token_address="   ")),
                         RejectReason.MISSING_ADDRESS)

    def test_description_quality(self):
        self.assertTrue(self.validator.validate_description(None))
        self.assertFalse(self.validator.validate_description("short token"))
        self.assertFalse(self.validator.validate_description("A long enough sentence about nothing at all"))
        self.assertTrue(self.validator.validate_description("The first community driven DeFi protocol on Base"))


class TestMetricsExtractor(unittest.TestCase):

    def setUp(self):
        self.extractor = MetricsExtractor()

    def test_empty_pools_raise_no_data(self):
        with self.assertRaises(NoDataError):
            self.extractor.extract([])

    def test_main_pool_has_highest_liquidity(self):
        pools = [
            PoolSnapshot(liquidity_usd=1000, pair_address="a"),
            PoolSnapshot(liquidity_usd=90000, pair_address="b"),
            PoolSnapshot(liquidity_usd=5000, pair_address="c"),
        ]
        main_pool, metrics = self.extractor.extract(pools)
        self.assertEqual(main_pool.pair_address, "b")
        for pool in pools:
            self.assertGreaterEqual(main_pool.liquidity_usd, pool.liquidity_usd)
        self.assertEqual(metrics.liquidity_change, 90000)

    def test_liquidity_tie_keeps_first_pool(self):
        pools = [
            PoolSnapshot(liquidity_usd=100, pair_address="low"),
            PoolSnapshot(liquidity_usd=5000, pair_address="first"),
            PoolSnapshot(liquidity_usd=5000, pair_address="second"),
        ]
        self.assertEqual(self.extractor.select_main_pool(pools).pair_address, "first")

    def test_input_order_is_not_mutated(self):
        pools = [PoolSnapshot(liquidity_usd=1), PoolSnapshot(liquidity_usd=2)]
        self.extractor.extract(pools)
        self.assertEqual(pools[0].liquidity_usd, 1)

    def test_metrics_default_to_zero(self):
        _, metrics = self.extractor.extract([PoolSnapshot()])
        self.assertEqual(metrics, MainPoolMetrics(0, 0, 0))


class TestAnomalyDetector(unittest.TestCase):

    def setUp(self):
        self.detector = AnomalyDetector()

    def test_healthy_pool_is_clean(self):
        pool = PoolSnapshot(liquidity_usd=50000, volume_h24=20000, price_change_h24=40,
                            buys_h24=60, sells_h24=40)
        self.assertEqual(self.detector.detect(pool), [])
        self.assertFalse(self.detector.is_suspicious(pool))

    def test_low_liquidity_to_volume(self):
        pool = PoolSnapshot(liquidity_usd=999, volume_h24=10000, buys_h24=50, sells_h24=50)
        self.assertIn(LOW_LIQUIDITY_TO_VOLUME, self.detector.detect(pool))

    def test_zero_volume_divides_by_one(self):
        pool = PoolSnapshot(liquidity_usd=1, volume_h24=0)
        self.assertNotIn(LOW_LIQUIDITY_TO_VOLUME, self.detector.detect(pool))
        self.assertIn(LOW_LIQUIDITY_TO_VOLUME, self.detector.detect(PoolSnapshot()))

    def test_high_volume_few_transactions(self):
        pool = PoolSnapshot(liquidity_usd=50000, volume_h24=20000, buys_h24=1, sells_h24=0)
        self.assertEqual(self.detector.detect(pool), [HIGH_VOLUME_FEW_TXNS])

    def test_few_transactions_with_low_volume_is_fine(self):
        pool = PoolSnapshot(liquidity_usd=50000, volume_h24=10000, buys_h24=1, sells_h24=0)
        self.assertEqual(self.detector.detect(pool), [])

    def test_one_sided_trading(self):
        all_buys = PoolSnapshot(liquidity_usd=50000, volume_h24=5000, buys_h24=96, sells_h24=4)
        all_sells = PoolSnapshot(liquidity_usd=50000, volume_h24=5000, buys_h24=4, sells_h24=96)
        self.assertIn(ONE_SIDED_TRADING, self.detector.detect(all_buys))
        self.assertIn(ONE_SIDED_TRADING, self.detector.detect(all_sells))

    def test_one_sided_ignored_at_ten_transactions(self):
        pool = PoolSnapshot(liquidity_usd=50000, volume_h24=5000, buys_h24=10, sells_h24=0)
        self.assertNotIn(ONE_SIDED_TRADING, self.detector.detect(pool))

    def test_extreme_price_move(self):
        pool = PoolSnapshot(liquidity_usd=50000, volume_h24=5000, price_change_h24=-1000.5,
                            buys_h24=50, sells_h24=50)
        self.assertEqual(self.detector.detect(pool), [EXTREME_PRICE_MOVE])
        edge = PoolSnapshot(liquidity_usd=50000, volume_h24=5000, price_change_h24=1000,
                            buys_h24=50, sells_h24=50)
        self.assertEqual(self.detector.detect(edge), [])


class TestSocialScorer(unittest.TestCase):

    def setUp(self):
        self.scorer = SocialScorer()

    def test_empty_candidate_scores_zero(self):
        self.assertEqual(self.scorer.score(make_candidate()), 0)

    def test_twitter_telegram_bonus(self):
        candidate = make_candidate(links=(SocialLink("twitter"), SocialLink("telegram")))
        self.assertEqual(self.scorer.score(candidate), 3)

    def test_duplicate_platforms_count_once(self):
        candidate = make_candidate(links=(SocialLink("twitter", "a"), SocialLink("twitter", "b")))
        self.assertEqual(self.scorer.score(candidate), 1)

    def test_images_add_half_points(self):
        self.assertEqual(self.scorer.score(make_candidate(icon="i.png")), 0.5)
        self.assertEqual(self.scorer.score(make_candidate(icon="i.png", header="h.png")), 1.0)

    def test_score_is_monotonic(self):
        steps = [
            make_candidate(),
            make_candidate(links=(SocialLink("website"),)),
            make_candidate(links=(SocialLink("website"), SocialLink("twitter"))),
            make_candidate(links=(SocialLink("website"), SocialLink("twitter"), SocialLink("telegram"))),
            make_candidate(links=(SocialLink("website"), SocialLink("twitter"), SocialLink("telegram")),
                           icon="i.png"),
            make_candidate(links=(SocialLink("website"), SocialLink("twitter"), SocialLink("telegram")),
                           icon="i.png", header="h.png"),
        ]
        scores = [self.scorer.score(c) for c in steps]
        self.assertEqual(scores, sorted(scores))
        self.assertEqual(scores[-1], 5)


class TestThresholdScorer(unittest.TestCase):

    def setUp(self):
        self.scorer = ThresholdScorer()

    def check(self, liquidity=50000, volume=1000, price_change=15, social=3):
        metrics = MainPoolMetrics(price_change_percent=price_change, volume_change=volume,
                                  liquidity_change=liquidity)
        return {c.name: c for c in self.scorer.evaluate(metrics, social)}

    def test_all_pass(self):
        checks = self.check()
        self.assertTrue(self.scorer.passed(list(checks.values())))
        self.assertEqual(len(checks), 4)

    def test_liquidity_bounds_are_inclusive(self):
        self.assertTrue(self.check(liquidity=10000)["liquidity"].passed)
        self.assertTrue(self.check(liquidity=200000)["liquidity"].passed)
        self.assertFalse(self.check(liquidity=9999.99)["liquidity"].passed)
        self.assertFalse(self.check(liquidity=200000.01)["liquidity"].passed)

    def test_volume_minimum(self):
        self.assertTrue(self.check(volume=500)["volume"].passed)
        self.assertFalse(self.check(volume=499.99)["volume"].passed)

    def test_price_movement(self):
        self.assertFalse(self.check(price_change=0)["price_movement"].passed)
        self.assertTrue(self.check(price_change=-5)["price_movement"].passed)
        self.assertTrue(self.check(price_change=1999.99)["price_movement"].passed)
        self.assertFalse(self.check(price_change=2000)["price_movement"].passed)

    def test_social_score_minimum(self):
        self.assertTrue(self.check(social=1)["social_score"].passed)
        self.assertFalse(self.check(social=0.5)["social_score"].passed)

    def test_failing_check_reports_live_value(self):
        checks = self.check(liquidity=250000)
        self.assertFalse(self.scorer.passed(list(checks.values())))
        self.assertEqual(checks["liquidity"].value, 250000)
        self.assertIn("200,000", checks["liquidity"].requirement)

    def test_custom_thresholds(self):
        scorer = ThresholdScorer({'min_liquidity_usd': 1, 'max_liquidity_usd': 10})
        checks = scorer.evaluate(MainPoolMetrics(10, 1000, 5), 3)
        self.assertTrue(scorer.passed(checks))


class TestChainConfig(unittest.TestCase):

    def test_policies_are_lowercased_and_filtered(self):
        configs = {"chains": {
            "Solana": {"enabled": True, "requires_trust_check": True},
            "base": {"enabled": True},
            "ethereum": {"enabled": False},
            "arbitrum": None,
        }}
        policies = get_chain_policies(configs)
        self.assertTrue(policies["solana"]["requires_trust_check"])
        self.assertEqual(policies["arbitrum"], {})
        self.assertEqual(get_enabled_chains(configs), ["solana", "base"])

    def test_bundled_chains_file(self):
        policies = get_chain_policies(load_chain_configs())
        self.assertTrue(policies["solana"]["requires_trust_check"])
        self.assertFalse(policies["base"]["requires_trust_check"])

    def test_missing_file_falls_back_to_defaults(self):
        configs = load_chain_configs("/nonexistent/chains.yaml")
        self.assertEqual(get_enabled_chains(configs), ["solana", "base"])

    def test_bare_chains_key_means_no_chains(self):
        self.assertEqual(get_chain_policies({"chains": None}), {})
        self.assertEqual(get_enabled_chains({"chains": None}), [])

    def test_policy_keys_are_all_consumed(self):
        for policy in get_chain_policies(load_chain_configs()).values():
            self.assertEqual(set(policy), {"enabled", "requires_trust_check"})


if __name__ == '__main__':
    unittest.main()
