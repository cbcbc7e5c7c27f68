import json
import unittest

from app import app as flask_app  # noqa: E402
import app as app_mod             # noqa: E402
from game import AttemptState, LevelConfig  # noqa: E402


MERGE_GRID = (
    1, 1, 3, 2,
    2, 3, 2, 3,
    3, 2, 3, 2,
    2, 3, 2, 3,
)

DEAD_END_GRID = (
    3, 3, 3,
    3, 1, 2,
    2, 3, 3,
)


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def _post(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json")

    def _merge_state(self, **overrides):
        cfg = LevelConfig(grid_size=4, max_value=3, initial_stock=10, target_score=200,
                          initial_grid=MERGE_GRID, **overrides)
        st = AttemptState(grid=MERGE_GRID, score=0, combo=0, stock=10, shuffles=cfg.shuffles)
        return app_mod._state_to_json(cfg, st)

    def test_given_new_game_when_posted_then_returns_state(self):
        payload = {"config": {"gridSize": 4, "maxValue": 3, "stock": 30, "targetScore": 200}, "seed": 123}
        r = self._post("/api/new", payload)
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        state = data["state"]
        self.assertEqual(len(state["grid"]), 16)
        self.assertEqual(state["score"], 0)
        self.assertEqual(state["stock"], 30)
        self.assertEqual(state["config"]["targetScore"], 200)
        self.assertIsInstance(data["hasLegalMove"], bool)

        r2 = self._post("/api/legal", {"state": state})
        self.assertEqual(r2.status_code, 200)
        self.assertEqual(r2.get_json()["hasLegalMove"], data["hasLegalMove"])

    def test_given_same_seed_when_new_game_then_same_grid(self):
        payload = {"config": {"gridSize": 5}, "seed": 9}
        g1 = self._post("/api/new", payload).get_json()["state"]["grid"]
        g2 = self._post("/api/new", payload).get_json()["state"]["grid"]
        self.assertEqual(g1, g2)

    def test_given_invalid_config_when_new_game_then_bad_request(self):
        r = self._post("/api/new", {"config": {"gridSize": 0}})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])

    def test_given_valid_path_when_moving_then_outcome_and_new_state(self):
        r = self._post("/api/move", {"state": self._merge_state(), "path": [0, 1]})
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["outcome"]["kind"], "resolved")
        self.assertEqual(d["outcome"]["points"], 8)
        self.assertEqual(d["outcome"]["transformed"], [0, 1])
        self.assertEqual(d["state"]["score"], 8)
        self.assertEqual(d["state"]["grid"][:2], [2, 2])

    def test_given_short_path_when_moving_then_rejected_with_state_unchanged(self):
        state = self._merge_state()
        r = self._post("/api/move", {"state": state, "path": [2]})
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertEqual(d["outcome"]["kind"], "rejected")
        self.assertEqual(d["state"], state)

    def test_given_missing_or_broken_state_when_moving_then_bad_request(self):
        r = self._post("/api/move", {"path": [0, 1]})
        self.assertEqual(r.status_code, 400)
        state = self._merge_state()
        state["phase"] = "SLEEPING"
        r2 = self._post("/api/move", {"state": state, "path": [0, 1]})
        self.assertEqual(r2.status_code, 400)
        state = self._merge_state()
        state["stock"] = -3
        r3 = self._post("/api/move", {"state": state, "path": [0, 1]})
        self.assertEqual(r3.status_code, 400)

    def test_given_non_object_payloads_when_posted_then_bad_request(self):
        cases = [
            ("/api/new", {"config": [1, 2]}),
            ("/api/new", [1, 2]),
            ("/api/new", {"config": {"challenge": "column"}}),
            ("/api/move", [1, 2]),
            ("/api/shuffle", "state"),
        ]
        for url, payload in cases:
            r = self._post(url, payload)
            self.assertEqual(r.status_code, 400, (url, payload))
            self.assertFalse(r.get_json()["ok"])

        state = self._merge_state()
        state["config"] = "oops"
        r = self._post("/api/move", {"state": state, "path": [0, 1]})
        self.assertEqual(r.status_code, 400)
        self.assertIn("config must be an object", r.get_json()["error"])

    def test_given_out_of_range_cell_in_state_when_moving_then_bad_request(self):
        cfg = LevelConfig(grid_size=3, max_value=3, initial_stock=0, target_score=200, initial_grid=DEAD_END_GRID)
        st = AttemptState(grid=DEAD_END_GRID, score=0, combo=0, stock=0, shuffles=0)
        state = app_mod._state_to_json(cfg, st)
        state["grid"][5] = -4
        r = self._post("/api/move", {"state": state, "path": [5]})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])

    def test_given_awarded_lines_when_round_tripped_then_axis_kept(self):
        state = self._merge_state()
        state["awardedLines"] = [{"axis": "row", "index": 3, "value": 3}]
        d = self._post("/api/shuffle", {"state": state}).get_json()
        self.assertFalse(d["shuffled"])
        self.assertEqual(d["state"]["awardedLines"], [{"axis": "row", "index": 3, "value": 3}])

        state["awardedLines"] = [{"axis": "diagonal", "index": 0, "value": 3}]
        r = self._post("/api/shuffle", {"state": state})
        self.assertEqual(r.status_code, 400)

    def test_given_shuffle_budget_when_shuffling_then_budget_spent(self):
        r = self._post("/api/shuffle", {"state": self._merge_state(shuffles=1), "seed": 3})
        d = r.get_json()
        self.assertTrue(d["shuffled"])
        self.assertEqual(d["state"]["shuffles"], 0)
        self.assertEqual(sorted(d["state"]["grid"]), sorted(MERGE_GRID))

        r2 = self._post("/api/shuffle", {"state": d["state"]})
        self.assertFalse(r2.get_json()["shuffled"])

    def test_given_winning_move_when_reporting_then_victory_and_score(self):
        cfg = LevelConfig(grid_size=3, max_value=3, initial_stock=0, target_score=200, initial_grid=DEAD_END_GRID)
        st = AttemptState(grid=DEAD_END_GRID, score=136, combo=0, stock=0, shuffles=0)
        r = self._post("/api/move", {"state": app_mod._state_to_json(cfg, st), "path": [2, 1, 0, 3]})
        d = r.get_json()
        self.assertEqual(d["state"]["phase"], "VICTORY")
        self.assertTrue(d["outcome"]["phaseChanged"])
        self.assertEqual(d["outcome"]["destroyed"], [2, 1, 0, 3])

        r2 = self._post("/api/report", {"state": d["state"]})
        rep = r2.get_json()["report"]
        self.assertTrue(rep["victory"])
        self.assertEqual(rep["score"], 200)
        self.assertFalse(rep["challengeCompleted"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
