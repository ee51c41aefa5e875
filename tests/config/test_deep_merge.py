from mongofix.utils import deep_merge


class TestDeepMerge:
    def test_deep_merge(self):
        dict1 = {"a": 1, "b": {"c": 2, "d": 3}}
        dict2 = {"b": {"c": 4}}
        assert deep_merge(dict1, dict2) == {"a": 1, "b": {"c": 4, "d": 3}}

    def test_deep_merge_with_empty_dict(self):
        dict1 = {"a": 1, "b": {"c": 2, "d": 3}}
        assert deep_merge(dict1, {}) == {"a": 1, "b": {"c": 2, "d": 3}}

    def test_deep_merge_with_empty_dict2(self):
        dict2 = {"a": 1, "b": {"c": 2, "d": 3}}
        assert deep_merge({}, dict2) == {"a": 1, "b": {"c": 2, "d": 3}}

    def test_deep_merge_leaves_arguments_untouched(self):
        dict1 = {"gateway": {"provider": "memory"}}
        dict2 = {"gateway": {"provider": "mongodb"}}

        deep_merge(dict1, dict2)

        assert dict1 == {"gateway": {"provider": "memory"}}

    def test_deep_merge_with_realistic_config_values(self):
        default_config = {
            "gateway": {"provider": "memory"},
            "ignored_fields": ["_id"],
        }
        new_config = {
            "gateway": {
                "provider": "mongodb",
                "database_uri": "mongodb://localhost:27017",
            },
            "ignored_fields": ["_id", "updated_at"],
        }

        assert deep_merge(default_config, new_config) == {
            "gateway": {
                "provider": "mongodb",
                "database_uri": "mongodb://localhost:27017",
            },
            "ignored_fields": ["_id", "updated_at"],
        }
