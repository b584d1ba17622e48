"""Tests for ship.core.targets module."""

from __future__ import annotations

import re
from typing import get_args

import pytest

from ship.core.targets import (
    DeploymentTarget,
    TargetStatus,
    default_backend_url,
    resolve_environment,
    resolve_project_name,
    resolve_service_name,
    resolve_target,
    slugify_branch,
)


class TestServiceName:
    @pytest.mark.parametrize("branch", ["prod", "production", "main"])
    def test_production_aliases(self, branch: str) -> None:
        assert resolve_service_name(branch) == "cicd-demo-backend-prod"

    def test_gamma(self) -> None:
        assert resolve_service_name("gamma") == "cicd-demo-backend-gamma"

    def test_beta(self) -> None:
        assert resolve_service_name("beta") == "cicd-demo-backend-beta"

    def test_feature_branch_is_slugged(self) -> None:
        assert resolve_service_name("feature/X-1") == "cicd-demo-backend-feature-x-1"

    def test_aliases_are_case_sensitive(self) -> None:
        """Only the exact alias spellings map to fixed names."""
        assert resolve_service_name("Main") == "cicd-demo-backend-main"


class TestProjectName:
    @pytest.mark.parametrize("branch", ["prod", "production", "main"])
    def test_production_aliases(self, branch: str) -> None:
        assert resolve_project_name(branch) == "prod-cicd-demo"

    def test_gamma_and_beta(self) -> None:
        assert resolve_project_name("gamma") == "gamma-cicd-demo"
        assert resolve_project_name("beta") == "beta-cicd-demo"

    def test_feature_branch_is_slugged(self) -> None:
        assert resolve_project_name("feature/X-1") == "feature-x-1-cicd-demo"


class TestSlug:
    @pytest.mark.parametrize(
        "branch",
        ["feature/X-1", "Hotfix_2024.01", "a b\tc", "ÄÖü/ß", "", "----", "UPPER"],
    )
    def test_slug_property(self, branch: str) -> None:
        """Slug is the lowercased input with every char outside [a-z0-9] replaced."""
        slug = slugify_branch(branch)
        expected = "".join(c if re.fullmatch(r"[a-z0-9]", c) else "-" for c in branch.lower())
        assert slug == expected
        assert re.fullmatch(r"[a-z0-9-]*", slug)

    def test_length_preserved_for_ascii(self) -> None:
        assert len(slugify_branch("feat/ABC_123")) == len("feat/ABC_123")


class TestEnvironment:
    @pytest.mark.parametrize("branch", ["prod", "production", "main"])
    def test_production(self, branch: str) -> None:
        assert resolve_environment(branch) == "production"

    @pytest.mark.parametrize("branch", ["gamma", "beta", "feature/x"])
    def test_preview(self, branch: str) -> None:
        assert resolve_environment(branch) == "preview"


class TestDeploymentTarget:
    def test_default_backend_url(self) -> None:
        assert (
            default_backend_url("cicd-demo-backend-prod")
            == "https://cicd-demo-backend-prod.onrender.com"
        )

    def test_resolve_target_starts_unresolved(self) -> None:
        target = resolve_target("beta")
        assert target.name == "cicd-demo-backend-beta"
        assert target.service_id is None
        assert target.address is None
        assert target.status == "pending"

    def test_resolved_address_falls_back_to_default(self) -> None:
        target = DeploymentTarget(name="cicd-demo-backend-beta")
        assert target.resolved_address == "https://cicd-demo-backend-beta.onrender.com"

    def test_resolved_address_prefers_known_address(self) -> None:
        target = DeploymentTarget(name="x", address="https://x.example.com")
        assert target.resolved_address == "https://x.example.com"

    def test_status_lifecycle(self) -> None:
        # A failed deploy ends the run with an error; the target never records it.
        assert get_args(TargetStatus) == ("pending", "found", "deploying", "live", "unknown")
