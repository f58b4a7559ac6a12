# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the gradle-parser documentation."""

project = "gradle-parser"
author = "gradle-parser Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]

html_theme = "alabaster"
