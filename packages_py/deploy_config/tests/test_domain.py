import pytest

from deploy_config.domain import (
    COMPONENT_FLAG_KEYS,
    ComponentFlag,
    DeploymentDocument,
)
from deploy_config.errors import InvalidDocumentError


class TestDeploymentDocument:
    def test_parse_raw_mapping(self, document):
        doc = DeploymentDocument.parse(document)
        assert list(doc.environments) == ["dev", "prod", "ephemeral"]
        assert "network" in doc.defaults

    def test_parse_returns_existing_model(self, document):
        doc = DeploymentDocument.parse(document)
        assert DeploymentDocument.parse(doc) is doc

    def test_missing_sections_default_to_empty(self):
        doc = DeploymentDocument.parse({})
        assert doc.defaults == {}
        assert doc.environments == {}

    def test_null_sections_and_bodies(self):
        doc = DeploymentDocument.parse({
            "defaults": None,
            "environments": {"dev": None, "prod": {"regions": None}, "qa": {"regions": {"us-west-2": None}}},
        })
        assert doc.defaults == {}
        assert doc.environment("dev") == {}
        assert doc.regions_of("prod") == {}
        assert doc.region("qa", "us-west-2") == {}

    def test_unknown_top_level_keys_ignored(self):
        doc = DeploymentDocument.parse({"version": 2, "environments": {"dev": {}}})
        assert list(doc.environments) == ["dev"]

    def test_root_must_be_mapping(self):
        with pytest.raises(InvalidDocumentError, match="Config root must be a mapping"):
            DeploymentDocument.parse([1, 2, 3])

    @pytest.mark.parametrize("raw", [
        {"environments": ["dev"]},
        {"environments": {"dev": "not-a-mapping"}},
        {"environments": {"dev": {"regions": "us-west-2"}}},
        {"environments": {"dev": {"regions": {"us-west-2": ["x"]}}}},
        {"defaults": "nope"},
    ])
    def test_malformed_documents(self, raw):
        with pytest.raises(InvalidDocumentError):
            DeploymentDocument.parse(raw)

    def test_lookup_helpers(self, document):
        doc = DeploymentDocument.parse(document)
        assert doc.environment("missing") == {}
        assert list(doc.regions_of("dev")) == ["us-west-2"]
        assert doc.region("dev", None) == {}
        assert doc.region("dev", "us-east-1") == {}
        assert "network" in doc.region("dev", "us-west-2")


class TestComponentFlags:
    def test_flag_keys(self):
        assert ComponentFlag.REGION_AGNOSTIC.value == "_regionAgnostic"
        assert "_regionAgnostic" in COMPONENT_FLAG_KEYS


class TestAccountsKey:
    def test_accounts_used_as_environments(self):
        doc = DeploymentDocument.parse({"accounts": {"dev": {"regions": {"us-west-2": None}}}})
        assert list(doc.environments) == ["dev"]
        assert doc.region("dev", "us-west-2") == {}

    def test_accounts_win_over_environments(self):
        doc = DeploymentDocument.parse({"accounts": {"prod": {}}, "environments": {"dev": {}}})
        assert list(doc.environments) == ["prod"]

    def test_null_accounts_fall_back(self):
        doc = DeploymentDocument.parse({"accounts": None, "environments": {"dev": {}}})
        assert list(doc.environments) == ["dev"]

    def test_raw_document_not_mutated(self):
        raw = {"accounts": {"dev": {}}}
        DeploymentDocument.parse(raw)
        assert raw == {"accounts": {"dev": {}}}
