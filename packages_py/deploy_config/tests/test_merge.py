from deploy_config.flatten import flatten
from deploy_config.merge import deep_merge, find_null_path


class TestDeepMerge:
    def test_later_layers_win(self):
        merged = deep_merge({"a": 1, "b": 2}, {"b": 3}, {"c": 4})
        assert merged == {"a": 1, "b": 3, "c": 4}

    def test_nested_mappings_merge(self):
        merged = deep_merge(
            {"network": {"vpc_cidr": "10.2.0.0/21", "nat": "t4g.micro"}},
            {"network": {"nat": "t4g.nano"}},
        )
        assert merged == {"network": {"vpc_cidr": "10.2.0.0/21", "nat": "t4g.nano"}}

    def test_arrays_are_replaced(self):
        """Test lists are replaced wholesale, never concatenated."""
        merged = deep_merge({"zones": ["a", "b", "c"]}, {"zones": ["d"]})
        assert merged == {"zones": ["d"]}

    def test_null_overrides_value_and_value_overrides_null(self):
        assert deep_merge({"a": "x"}, {"a": None}) == {"a": None}
        assert deep_merge({"a": None}, {"a": "x"}) == {"a": "x"}

    def test_scalar_replaces_mapping(self):
        assert deep_merge({"a": {"b": 1}}, {"a": "flat"}) == {"a": "flat"}

    def test_missing_layers_skipped(self):
        assert deep_merge(None, {"a": 1}, None) == {"a": 1}
        assert deep_merge() == {}

    def test_inputs_not_mutated(self):
        base = {"network": {"zones": ["a"], "nat": "micro"}}
        override = {"network": {"nat": "nano"}}
        merged = deep_merge(base, override)
        merged["network"]["zones"].append("b")

        assert base == {"network": {"zones": ["a"], "nat": "micro"}}
        assert override == {"network": {"nat": "nano"}}


class TestFindNullPath:
    def test_no_nulls(self):
        assert find_null_path({"a": 1, "b": {"c": "x"}}) is None

    def test_top_level_null(self):
        assert find_null_path({"a": 1, "b": None}) == "b"

    def test_nested_null_path(self):
        assert find_null_path({"network": {"subnet": {"id": None}}}) == "network.subnet.id"

    def test_first_null_in_key_order(self):
        assert find_null_path({"x": {"y": None}, "z": None}) == "x.y"

    def test_lists_are_leaves(self):
        """Test nulls inside lists are not reported."""
        assert find_null_path({"zones": [None, "a"]}) is None

    def test_prefix_path(self):
        assert find_null_path({"host": None}, "db") == "db.host"


class TestFlatten:
    def test_nested_keys_joined(self):
        result = flatten({"network": {"vpc_cidr": "10.0.0.0/21"}, "region": "us-west-2"})
        assert result == {"network.vpc_cidr": "10.0.0.0/21", "region": "us-west-2"}

    def test_custom_delimiter(self):
        result = flatten({"a": {"b": {"c": 1}}}, delimiter="__")
        assert result == {"a__b__c": 1}

    def test_lists_kept_as_values(self):
        result = flatten({"network": {"zones": ["a", "b"]}})
        assert result == {"network.zones": ["a", "b"]}

    def test_empty_mapping_disappears(self):
        assert flatten({"empty": {}, "a": 1}) == {"a": 1}

    def test_prefix(self):
        assert flatten({"a": 1}, prefix="root") == {"root.a": 1}


class TestMergeProperties:
    def test_fold_equivalence(self):
        """Test merging all layers at once equals merging pairwise."""
        a = {"x": {"y": 1, "z": [1, 2]}, "k": None}
        b = {"x": {"z": [3]}, "k": "v"}
        c = {"x": {"y": None}, "n": {"m": 1}}
        assert deep_merge(a, b, c) == deep_merge(deep_merge(a, b), c)


class TestEmptyKeyNullPath:
    def test_empty_top_level_key(self):
        """Test a null under an empty-string key is still reported."""
        assert find_null_path({"": None}) == ""

    def test_nested_under_empty_key(self):
        assert find_null_path({"ok": 1, "": {"x": None}}) == ".x"

    def test_empty_key_without_null(self):
        assert find_null_path({"": {"x": 1}}) is None
