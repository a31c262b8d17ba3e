# -*- coding: utf-8 -*-
import sys

from netctrl.cli import main

sys.exit(main())
