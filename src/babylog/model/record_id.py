# SPDX-License-Identifier: MIT

type RecordId = int
