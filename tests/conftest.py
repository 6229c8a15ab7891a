"""
Pytest configuration and fixtures for iacmodel tests.

This module provides common fixtures used across unit and integration tests.
Module Sets are built from inline Terraform source with the loader.
"""

from __future__ import annotations

from typing import Callable

import pytest

from iacmodel.terraform import ModuleSet, load_source


# Terraform source fixtures


@pytest.fixture
def storage_source() -> str:
    """Return a storage account with nested blocks and two satellites."""
    return """
resource "azurerm_resource_group" "example" {
  name = "example"
}

resource "azurerm_storage_account" "example" {
  name                = "storageaccountname"
  resource_group_name = azurerm_resource_group.example.name

  network_rules {
    default_action = "Deny"
    bypass         = ["Metrics", "AzureServices"]
  }

  enable_https_traffic_only = true
  queue_properties {
    logging {
      delete                = true
      read                  = true
      write                 = true
      version               = "1.0"
      retention_policy_days = 10
    }
  }
  min_tls_version = "TLS1_2"
}

resource "azurerm_storage_account_network_rules" "test" {
  resource_group_name  = azurerm_resource_group.example.name
  storage_account_name = azurerm_storage_account.example.name

  default_action = "Allow"
  bypass         = ["Metrics"]
}

resource "azurerm_storage_container" "example" {
  storage_account_name  = azurerm_storage_account.example.name
  resource_group_name   = azurerm_resource_group.example.name
  container_access_type = "blob"
}
"""


@pytest.fixture
def lines_source() -> str:
    """Return a storage configuration with known line numbers."""
    return """
resource "azurerm_resource_group" "example" {
  name     = "example"
  location = "West Europe"
}

resource "azurerm_storage_account" "example" {
  resource_group_name = azurerm_resource_group.example.name

  enable_https_traffic_only = true
  min_tls_version           = "TLS1_2"

  queue_properties {
    logging {
      delete                = true
      read                  = true
      write                 = true
      version               = "1.0"
      retention_policy_days = 10
    }
  }

  network_rules {
    default_action = "Deny"
    bypass         = ["Metrics", "AzureServices"]
  }
}

resource "azurerm_storage_account_network_rules" "test" {
  resource_group_name  = azurerm_resource_group.example.name
  storage_account_name = azurerm_storage_account.example.name

  default_action = "Allow"
  bypass         = ["Metrics"]
}

resource "azurerm_storage_container" "example" {
  storage_account_name  = azurerm_storage_account.example.name
  resource_group_name   = azurerm_resource_group.example.name
  container_access_type = "blob"
}"""


@pytest.fixture
def orphan_source() -> str:
    """Return satellites without any storage account."""
    return """
resource "azurerm_storage_account_network_rules" "test" {
  default_action = "Allow"
  bypass         = ["Metrics"]
}

resource "azurerm_storage_container" "example" {
  container_access_type = "blob"
}
"""


# Helpers


@pytest.fixture
def modules() -> Callable[[str], ModuleSet]:
    """Return a helper that builds a Module Set from Terraform source."""

    def _build(source: str, filename: str = "main.tf") -> ModuleSet:
        return load_source(source, filename=filename)

    return _build
