"""Exceptions for use in Class Bracket"""

# Class Bracket
# Copyright (C) 2025  Class Bracket developers
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


class ClassBracketException(Exception):
    """Base exception for all Class Bracket errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Store Exceptions ==========


class StoreException(ClassBracketException):
    """Base exception for roster/match store errors."""

    pass


class StudentNotFoundException(StoreException):
    """Raised when a requested student cannot be found."""

    pass


class MatchNotFoundException(StoreException):
    """Raised when a requested match cannot be found."""

    pass


class FileLoadException(StoreException):
    """Raised when a store file cannot be loaded."""

    pass


class FileSaveException(StoreException):
    """Raised when a store file cannot be saved."""

    pass


# ========== Match Exceptions ==========


class MatchException(ClassBracketException):
    """Base exception for match recording errors."""

    pass


class RepeatMatchException(MatchException):
    """Raised when two students who have already played are matched again."""

    pass


class EliminatedStudentException(MatchException):
    """Raised when an eliminated student is entered into a match."""

    pass


class InvalidMatchException(MatchException):
    """Raised when match data is invalid (e.g., a student playing themselves)."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(ClassBracketException):
    """Base exception for validation errors."""

    pass


class InvalidStudentDataException(ValidationException):
    """Raised when student data is invalid or incomplete."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(ClassBracketException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
