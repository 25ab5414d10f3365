"""Command dispatch: one wrapper per Redis command, grouped by family."""

from redisconn.commands.connection import ConnectionCommands
from redisconn.commands.dispatcher import CommandDispatcher
from redisconn.commands.hashes import HashCommands
from redisconn.commands.keys import KeyCommands
from redisconn.commands.lists import ListCommands
from redisconn.commands.sets import SetCommands
from redisconn.commands.sorted_sets import SortedSetCommands
from redisconn.commands.strings import StringCommands

__all__ = [
    "CommandDispatcher",
    "ConnectionCommands",
    "HashCommands",
    "KeyCommands",
    "ListCommands",
    "SetCommands",
    "SortedSetCommands",
    "StringCommands",
]
