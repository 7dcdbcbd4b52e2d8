"""Exceptions for use in Party Roulette"""

# Party Roulette
# Copyright (C) 2025  Party Roulette developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class PartyRouletteException(Exception):
    """Base exception for all Party Roulette errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Roster Exceptions ==========


class RosterException(PartyRouletteException):
    """Base exception for roster-related errors."""

    pass


class ParticipantNotFoundException(RosterException):
    """Raised when a requested participant cannot be found."""

    pass


class InvalidParticipantDataException(RosterException):
    """Raised when participant data is invalid or incomplete."""

    pass


# ========== Rule Exceptions ==========


class RuleException(PartyRouletteException):
    """Base exception for rule configuration errors."""

    pass


class InvalidRuleException(RuleException):
    """Raised when a preference rule is incomplete."""

    pass


class RuleNotFoundException(RuleException):
    """Raised when a requested preference rule does not exist."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(PartyRouletteException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PartyRouletteException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
