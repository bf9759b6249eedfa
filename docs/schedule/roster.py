schedule_roster_description = """
Generate a monthly duty roster for the given staff, services and unit constraints

### Request Body

- `staff`: List of `StaffProfile` objects:
    - `id`: Primary key of the staff member
    - `name`: Display name
    - `tier`: Seniority tier (1 = senior, 2 = experienced, 3 = junior; juniors may fill any service)
    - `unit`: Home unit (e.g. "General Surgery")
    - `specialty`: Optional rare specialty (`none`, `transplant`, `wound`)
    - `room`: Room identifier; staff sharing a room are never on duty on the same or adjacent days
    - `group`: Optional group label matched against a service's `preferredGroup`
    - `quota`: Monthly duty target (defaults per tier when omitted)
    - `weekendLimit`: Maximum weekend duties (defaults per tier when omitted)
    - `unavailableDays`: Days of the month the staff member cannot work
    - `requestedDays`: Days of the month the staff member asked for
    - `isActive`: Inactive staff are ignored

- `services`: List of `ServiceDefinition` objects:
    - `id`, `name`
    - `minDailyCount` / `maxDailyCount`: Staff required per day
    - `allowedUnits`: Units allowed to fill this service (empty = everyone)
    - `preferredGroup`: Group affinity (`any` = none)
    - `isEmergency`: Emergency service flag

- `constraints`: List of `UnitConstraintSpec` objects (Optional):
    - `unit`: A unit name or a specialty
    - `allowedDays`: Weekdays on which that unit/specialty may be used (0 = Sunday ... 6 = Saturday)

- `config`: `ScheduleConfig`:
    - `year`, `month` (1-12)
    - `maxRetries`: Number of attempts; the best is kept (must be at least 1)
    - `randomizeOrder`: Break ties between equally hard days randomly
    - `preventEveryOtherDay`: Penalise duty two days after a previous duty
    - `dailyTotalTarget`: Total staff per day to aim for once minimums are met
    - `seed`: Optional random seed for reproducible rosters

- `tierDefaults`: Optional map of tier to `{quota, weekendLimit}` used for staff that omit them

### Response

- `schedule`: One entry per day with its assignments. Unfillable positions appear with `staffId` = `EMPTY`.
- `staffSummary`: Per staff totals (ordinary, emergency, weekend, Saturday, Sunday) and quota deviation.
- `unfilledSlots`: Number of `EMPTY` positions.
- `logs`: Diagnostic messages (capped).
- `attempts`, `bestAttempt`, `deviation`: Best-of selection details.
"""

schedule_export_description = """
Generate a roster with the same request body as `/schedule/generate` and return it as an Excel workbook
with three sheets: `Roster` (one column per service), `By Staff` (one column per day) and `Summary`.
"""
