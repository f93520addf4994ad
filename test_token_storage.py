import json
import os
import shutil
import tempfile
import threading
import unittest

from analysis.models import Classification, Reason
from storage import TokenStorage


def winner(address="abc", chain="solana", name="PEPE"):
    return Classification(
        name=name, address=address, blockchain=chain, reason=Reason.TIER1,
        price_change_percent=15, volume_change=1000, liquidity_change=50000, social_score=3,
    )


class TestTokenStorage(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmp_dir, "nested", "interesting_tokens.json")
        self.storage = TokenStorage(self.path)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_initializes_empty_file(self):
        with open(self.path) as f:
            self.assertEqual(json.load(f), [])

    def test_save_is_idempotent_per_address_and_chain(self):
        self.assertTrue(self.storage.save_token(winner()))
        self.assertFalse(self.storage.save_token(winner(name="OTHER")))
        self.assertTrue(self.storage.save_token(winner(chain="base")))

        tokens = self.storage.get_tokens()
        self.assertEqual(len(tokens), 2)
        self.assertEqual(tokens[0]["name"], "PEPE")
        self.assertTrue(self.storage.contains("abc", "base"))
        self.assertFalse(self.storage.contains("xyz", "base"))

    def test_record_shape_round_trips(self):
        original = winner()
        self.storage.save_token(original)
        record = self.storage.get_tokens()[0]
        self.assertEqual(record["metrics"], {
            "priceChangePercent": 15,
            "volumeChange": 1000,
            "liquidityChange": 50000,
            "buyVsSellRatio": 3,
        })
        self.assertEqual(self.storage.get_classifications()[0], original)

    def test_existing_file_is_preserved(self):
        self.storage.save_token(winner())
        reopened = TokenStorage(self.path)
        self.assertEqual(len(reopened.get_tokens()), 1)
        self.assertFalse(reopened.save_token(winner()))

    def test_concurrent_saves_store_one_record(self):
        results = []
        threads = [threading.Thread(target=lambda: results.append(self.storage.save_token(winner())))
                   for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(results.count(True), 1)
        self.assertEqual(len(self.storage.get_tokens()), 1)


if __name__ == '__main__':
    unittest.main()
