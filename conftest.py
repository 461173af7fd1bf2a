# -*- coding: utf-8 -*-
# puts the repository root on sys.path so the tests run from a plain checkout
