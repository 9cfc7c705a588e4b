# SPDX-License-Identifier: Apache-2.0
"""
Test suite for the Yandex Foundation Models adapters.

HTTP traffic is served by the in-process fake in tests/mock; no test talks
to the real API.
"""
