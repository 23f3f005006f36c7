#!/usr/bin/env python3

# Copyright (C) 2025 The cpzkp developers
#
# This file is part of cpzkp. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of cpzkp including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the cpzkp package."

name = "cpzkp"
__version__ = "2025.1.15"
__author__ = "The cpzkp developers"
__author_email__ = "devs@cpzkp.org"
__copyright__ = "Copyright (C) 2025 The cpzkp developers"
__license__ = "MIT License"
