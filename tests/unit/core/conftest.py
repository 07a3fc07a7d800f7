"""Shared fixtures for core unit tests"""

import pytest

from mdvault.core.parse import parse


SAMPLE_MD = """\
---
title: Sample
tags: [a, b]
---
Title
=====
Intro with ``code`` and ``a `tick` b``.   


- [x] done
    - [x] sub done
- [ ] open
* star item

| Name | Value |
|:--|--:|
| deƒault | 1 |
| smol | 22 |

```python  
print("hi")   
```
***
header
---
"""

FORMATTED_MD = """\
---
title: Sample
tags: [a, b]
---

# Title

Intro with `code` and ``a `tick` b``.

- [x] done
    - [x] sub done
- [ ] open

* star item

| Name    | Value |
| :------ | ----: |
| deƒault |     1 |
| smol    |    22 |

```python
print("hi")
```

***

## header
"""

TODO_MD = """\
- [x] top level
    - [x] nested
    - [ ] nested not done
- [ ] not done
- [x] totally
    - [x] done

## Archived

- [x] done
- [x] also done
"""


@pytest.fixture(name="sample_doc")
def sample_doc_fixture():
    return parse(SAMPLE_MD)


@pytest.fixture(name="todo_doc")
def todo_doc_fixture():
    return parse(TODO_MD)


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="formatted_md")
def formatted_md_fixture():
    return FORMATTED_MD


@pytest.fixture(name="todo_md")
def todo_md_fixture():
    return TODO_MD
