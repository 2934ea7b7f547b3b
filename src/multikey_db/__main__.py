# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Allow ``python -m multikey_db``."""

import sys

from .cli import main

sys.exit(main())
