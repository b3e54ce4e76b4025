# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Value types shared by the tests."""

import enum
from collections import namedtuple
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class User:
    Name: str = ""
    Age: int = 0


@dataclass
class Address:
    Street: str = ""
    City: str = ""


@dataclass
class Profile:
    UserID: int = 0
    Nick: str = field(default="", metadata={"bson": "nickname,omitempty"})
    Secret: str = field(default="", metadata={"bson": "-"})
    Home: Optional[Address] = None
    Tags: List[str] = field(default_factory=list)
    Extra: dict = field(default_factory=dict)


@dataclass
class Item:
    id: int = 0
    qty: int = 0


@dataclass
class Cart:
    Items: List[Item] = field(default_factory=list)


@dataclass(frozen=True)
class Money:
    amount: int = 0
    currency: str = ""


Point = namedtuple("Point", ["x", "y"])


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


class Node:
    def __init__(self, value, next=None):
        self.value = value
        self.next = next
