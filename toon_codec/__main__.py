# -*- coding: utf-8 -*-
"""Location: ./toon_codec/__main__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Allow ``python -m toon_codec``.
"""

# First-Party
from toon_codec.cli import main

if __name__ == "__main__":
    main()
