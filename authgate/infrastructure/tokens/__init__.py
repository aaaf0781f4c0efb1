# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .jwt_issuer import JoseTokenIssuer

__all__ = ["JoseTokenIssuer"]
