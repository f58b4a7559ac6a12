# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Queries over parsed projects."""
