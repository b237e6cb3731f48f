"""Shared test fixtures for featurespec."""

from pathlib import Path

import pytest


@pytest.fixture
def search_feature() -> str:
    """Return a minimal feature with one navigating scenario."""
    return """\
Feature: Search
Scenario: Find results
Given I navigate to "https://example.com"
Then the page title should be "Example Domain"
"""


@pytest.fixture
def tutorial_feature() -> str:
    """Return a feature with a background, tags, tables and several scenarios."""
    return """\
@tutorial
Feature: Basic navigation
  As a tester I want to move around the docs site.

  Background:
    Given I open a new browser window

  # navigation
  Scenario: Open the docs
    Given I navigate to "https://playwright.dev"
    When the page is loaded
    Then I should see text "Playwright enables reliable end-to-end testing"
    And I should see a link "Get started"

  Scenario: Follow a link
    Given I navigate to "https://playwright.dev"
    When I click on "Get started"
    Then the URL should contain "intro"
    And the page title should be "Installation | Playwright"

  Scenario: Pending work
    Given a user with the following roles:
      | role  |
      | admin |
    Then something nobody has automated yet
"""


@pytest.fixture
def project(tmp_path: Path, search_feature: str, tutorial_feature: str) -> Path:
    """Create a project directory with two feature files and no config."""
    features = tmp_path / "features"
    features.mkdir()
    (features / "search.feature").write_text(search_feature)
    (features / "basic-navigation.feature").write_text(tutorial_feature)
    return tmp_path
