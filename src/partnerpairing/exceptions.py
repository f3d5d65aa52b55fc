"""Exceptions for use in Partner Pairing"""

# Partner Pairing
# Copyright (C) 2025  Partner Pairing developers
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


class PartnerPairingException(Exception):
    """Base exception for all Partner Pairing errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(PartnerPairingException):
    """Base exception for pairing-related errors."""

    pass


class InvalidRosterException(PairingException):
    """Raised when the roster cannot be paired (e.g. it is empty)."""

    pass


class InvalidIterationBudgetException(PairingException):
    """Raised when the search budget is not a positive integer."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(PartnerPairingException):
    """Base exception for participant-related errors."""

    pass


class InvalidParticipantException(ParticipantException):
    """Raised when a participant name is invalid."""

    pass


# ========== Storage Exceptions ==========


class StorageException(PartnerPairingException):
    """Raised when the pairing history store cannot be read or written."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(PartnerPairingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PartnerPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
