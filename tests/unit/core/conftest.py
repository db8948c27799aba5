"""Shared fixtures for core unit tests"""

import pytest

from docsearch.core.models import HeadingContext
from docsearch.core.parse import make_parser


SAMPLE_MD = """\
# Installation

- [Introduction](#introduction)
- [Requirements](#requirements)

<a name="introduction"></a>
## Introduction

Run `composer install` to get started.

<a name="requirements"></a>
## Requirements

| Requirement | Version |
| ----------- | ------- |
| PHP         | >= 7.1  |
| Composer    | 2.x     |

1. Download the installer
2. Run it from {{version}}/bin

```php
echo "excluded";
```

> A quoted aside.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser("gfm-like")


@pytest.fixture(name="ctx")
def ctx_fixture():
    """Fresh heading context for a document with slug 'installation'."""
    return HeadingContext(slug="installation")


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD
