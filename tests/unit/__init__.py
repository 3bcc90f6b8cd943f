# SPDX-License-Identifier: Apache-2.0
"""
tests.unit
==========

Unit tests for algo_sdk. Golden vectors shared by several modules live in
`tests/unit/vectors.py`:

    from .vectors import GOLDEN_BLOB, GOLDEN_TXID
"""
