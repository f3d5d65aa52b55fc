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

# --- Application ---
APP_NAME = "Partner Pairing"
APP_VERSION = "0.3.0"
LOGGER_NAME = "partnerpairing"

# --- Files ---
DEFAULT_ROSTER_PATH = "students.json"
DEFAULT_DATABASE_PATH = "db.sqlite"
ROSTER_JSON_EXTENSION = ".json"
ROSTER_CSV_EXTENSION = ".csv"
ROSTER_TEXT_EXTENSIONS = (".txt", ROSTER_CSV_EXTENSION)
# First-row cells taken as a csv header
ROSTER_CSV_HEADERS = ("name", "participant", "student")

# --- Search ---
DEFAULT_ITERATIONS = 10_000
# Upper bound accepted from the command line
MAX_ITERATIONS = 10_000_000
# Budgets compared by the benchmark command
DEFAULT_BENCHMARK_BUDGETS = (10, 100, 1_000, 10_000)
DEFAULT_BENCHMARK_TRIALS = 5

# --- Participants ---
MAX_PARTICIPANT_NAME_LENGTH = 100

# --- Display ---
MATRIX_HEADER_WIDTH = 3
MATRIX_SELF_CELL = "."
MATRIX_ZERO_CELL = "-"
GROUPS_BOX_WIDTH = 46
