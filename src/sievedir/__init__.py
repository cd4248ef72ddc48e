# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""sievedir - crash-safe directory store for filter scripts."""

__version__ = "0.1.0"
