import unittest

from pydantic import ValidationError

from src.common.agent import SECRET_KEY, SECRET_NAME, SECRET_TOKEN_ENV
from src.injector.config import AgentConfig
from src.injector.environment import build_environment


class AgentConfigTests(unittest.TestCase):
    def test_defaults_to_empty_environment(self) -> None:
        self.assertEqual(AgentConfig().environment, {})
        self.assertEqual(AgentConfig.from_mapping(None).environment, {})
        self.assertEqual(AgentConfig.from_mapping({"environment": None}).environment, {})

    def test_sorted_environment_orders_by_name(self) -> None:
        config = AgentConfig(environment={"ZED": "1", "ALPHA": "2", "MID": "3"})
        self.assertEqual(
            config.sorted_environment(), [("ALPHA", "2"), ("MID", "3"), ("ZED", "1")]
        )

    def test_rejects_blank_names(self) -> None:
        with self.assertRaises(ValidationError):
            AgentConfig(environment={" ": "value"})

    def test_rejects_non_string_values(self) -> None:
        with self.assertRaises(ValidationError):
            AgentConfig.from_mapping({"environment": {"LOG_LEVEL": ["debug"]}})

    def test_config_is_frozen(self) -> None:
        config = AgentConfig(environment={"A": "1"})
        with self.assertRaises(ValidationError):
            config.environment = {}


class BuildEnvironmentTests(unittest.TestCase):
    def test_empty_environment_yields_secret_token_only(self) -> None:
        env = build_environment(AgentConfig())
        self.assertEqual(
            env,
            [
                {
                    "name": SECRET_TOKEN_ENV,
                    "valueFrom": {"secretKeyRef": {"name": SECRET_NAME, "key": SECRET_KEY}},
                }
            ],
        )

    def test_configured_pairs_follow_token_in_name_order(self) -> None:
        config = AgentConfig(
            environment={"ELASTIC_APM_SERVICE_NAME": "shop", "ELASTIC_APM_LOG_LEVEL": "debug"}
        )
        env = build_environment(config)
        self.assertEqual(len(env), 3)
        self.assertEqual(env[0]["name"], SECRET_TOKEN_ENV)
        self.assertNotIn("value", env[0])
        self.assertEqual(
            env[1:],
            [
                {"name": "ELASTIC_APM_LOG_LEVEL", "value": "debug"},
                {"name": "ELASTIC_APM_SERVICE_NAME", "value": "shop"},
            ],
        )

    def test_output_is_reproducible(self) -> None:
        first = AgentConfig(environment={"B": "2", "A": "1"})
        second = AgentConfig(environment={"A": "1", "B": "2"})
        self.assertEqual(build_environment(first), build_environment(second))

    def test_each_call_returns_fresh_objects(self) -> None:
        config = AgentConfig()
        first = build_environment(config)
        first[0]["valueFrom"]["secretKeyRef"]["name"] = "mutated"
        self.assertEqual(build_environment(config)[0]["valueFrom"]["secretKeyRef"]["name"], SECRET_NAME)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
