# campuslife

A small campus life assistant for students, used from the command line or as
a library. It keeps:

- **Accounts** (`campuslife.accounts`): users register with a username and
  password. Passwords are stored as SHA-256 hex digests in `users.json`.
- **A course timetable** (`campuslife.courses`): a weekly grid of 12 periods
  over seven days (周一 to 周日). Each user's timetable is kept in
  `courses_<user>.json`.
- **A task list** (`campuslife.tasks`): tasks have a deadline and a priority
  (低, 中, 高). The list is sorted by deadline, and unfinished tasks due
  within 24 hours can be listed. Each user's tasks are kept in
  `tasks_<user>.json`.
- **A message board** (`campuslife.social`): one board shared by all users,
  kept in `messages.json`, newest message first. Users can post, search and
  delete their own messages. A message that starts with `@name ` is a reply
  to that user.

All data files are plain JSON, kept in the directory given by `--data-dir`
(the working directory by default).

## Installation

```
pip install .
```

## Command line

The `campuslife` command has subcommands. Every command except `about` needs
`--user`; the password is taken from `--password` or asked for at the
terminal. `--data-dir` comes before the subcommand.

```
campuslife register --user alice --password password
campuslife login --user alice --password password
campuslife about
```

Timetable (days are 1–7 or 周一 … 周日):

```
campuslife courses --user alice list
campuslife courses --user alice add 高等数学 --teacher 李老师 --location A101 --day 周一 --start 1 --duration 2
campuslife courses --user alice remove --day 1 --period 1
```

Tasks (`--deadline` is an ISO date and time, seven days from now by default;
`--priority` is 低, 中 or 高, 中 by default):

```
campuslife tasks --user alice list [--active]
campuslife tasks --user alice add 论文 --deadline 2030-01-10T18:00 --priority 高
campuslife tasks --user alice toggle 论文
campuslife tasks --user alice delete 论文
campuslife tasks --user alice due
```

`toggle` and `delete` act on a task whose name occurs in the given text.
`due` prints the unfinished tasks due within the next 24 hours.

Messages:

```
campuslife messages --user alice list [--search 比赛]
campuslife messages --user alice post "周末有篮球比赛"
campuslife messages --user bob reply <id>
campuslife messages --user bob post "@alice 我也去" --reply-to <id>
campuslife messages --user alice delete <id>
```

`reply` prints the `@author ` text that starts a reply. Only the author of a
message may delete it. Errors are printed to standard error and the command
exits with status 1.

## Library use

```python
from datetime import datetime

from campuslife.accounts import UserStore
from campuslife.courses import Timetable, parse_course
from campuslife.tasks import TaskList
from campuslife.social import MessageBoard

users = UserStore("users.json")
users.register("alice", "password")
assert users.verify("alice", "password")

timetable = Timetable("courses_alice.json")
timetable.add(parse_course({
    "name": "Calculus", "teacher": "Li", "location": "A101",
    "day": 1, "startTime": 1, "duration": 2,
}))
print(timetable.grid()[0][0])

tasks = TaskList("tasks_alice.json")
tasks.add("Essay", datetime(2030, 1, 10, 18, 0), "高", datetime.now())
for task in tasks.visible(show_completed=False):
    print(task.label())

board = MessageBoard("messages.json")
board.post("alice", "周末有篮球比赛", None, datetime.now())
for message in board.search("比赛"):
    print(board.render(message))
```

`Timetable.add`, `TaskList.add` and `MessageBoard.post` save to their file
straight away. `UserStore.register` raises `UsernameTakenError` for a name
already in use, and `AccountError` for an empty name or password;
`MessageBoard` raises `SocialError`.

`campuslife.styles` holds the theme colours, and
`message_background_color(username)` gives each user a fixed background
colour from `MESSAGE_COLORS`.

## What it does not do

There is no graphical interface: no windows, menus or style sheets, only the
colour values in `campuslife.styles`. Deadline reminders are not shown on
their own; run `campuslife tasks ... due` to see them. Existing courses
cannot be edited, only added and removed.

## Running the tests

```
pip install ".[test]"
pytest
```