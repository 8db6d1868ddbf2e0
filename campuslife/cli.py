"""Command-line front end: accounts, timetable, tasks and the message board."""

from __future__ import annotations

import argparse
import getpass
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

from campuslife.accounts import AccountError, UsernameTakenError, UserStore
from campuslife.courses import DAY_NAMES, HEADERS, PERIOD_LABELS, Course, Timetable
from campuslife.social import MessageBoard, SocialError
from campuslife.tasks import Priority, TaskList

APP_NAME = "校园生活助手"
ABOUT_TEXT = f"{APP_NAME} v1.0\n\n功能：课程管理、任务提醒、校园社交"
USERS_FILE = "users.json"
MESSAGES_FILE = "messages.json"
DEFAULT_DEADLINE_DAYS = 7


def _courses_path(data_dir: Path, user: str) -> Path:
    return data_dir / f"courses_{user}.json"


def _tasks_path(data_dir: Path, user: str) -> Path:
    return data_dir / f"tasks_{user}.json"


def _day(text: str) -> int:
    if text in DAY_NAMES:
        return DAY_NAMES.index(text) + 1
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"day must be 1-7 or one of {', '.join(DAY_NAMES)}"
        ) from None


def _datetime(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date and time: {text!r}") from None


def _password(args: argparse.Namespace) -> str:
    if args.password is not None:
        return args.password
    return getpass.getpass("密码: ")


def _login(args: argparse.Namespace, data_dir: Path) -> str:
    """Check the credentials and return the logged-in user name."""
    user = args.user.strip()
    if not UserStore(data_dir / USERS_FILE).verify(user, _password(args)):
        raise AccountError("用户名或密码错误！")
    return user


# Accounts ------------------------------------------------------------------


def _cmd_register(args: argparse.Namespace, data_dir: Path) -> int:
    try:
        UserStore(data_dir / USERS_FILE).register(args.user, _password(args))
    except UsernameTakenError:
        print("用户名已存在！", file=sys.stderr)
        return 1
    print("注册成功！请登录。")
    return 0


def _cmd_login(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    print(f"{APP_NAME} - {user}")
    return 0


def _cmd_about(args: argparse.Namespace, data_dir: Path) -> int:
    print(ABOUT_TEXT)
    return 0


# Courses -------------------------------------------------------------------


def _cmd_courses_list(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    grid = Timetable(_courses_path(data_dir, user)).grid()
    print("\t".join(HEADERS))
    for label, row in zip(PERIOD_LABELS, grid):
        cells = [cell.replace("\n", " / ") if cell else "-" for cell in row]
        print("\t".join([label, *cells]))
    return 0


def _cmd_courses_add(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    course = Course(
        name=args.name,
        teacher=args.teacher,
        location=args.location,
        day=args.day,
        start=args.start,
        duration=args.duration,
    )
    Timetable(_courses_path(data_dir, user)).add(course)
    print(f"已添加课程: {course.name}")
    return 0


def _cmd_courses_remove(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    removed = Timetable(_courses_path(data_dir, user)).remove_at(args.day, args.period)
    print(f"已删除 {removed} 门课程")
    return 0


# Tasks ---------------------------------------------------------------------


def _cmd_tasks_list(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    for task in TaskList(_tasks_path(data_dir, user)).visible(not args.active):
        print(task.label())
    return 0


def _cmd_tasks_add(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    now = datetime.now().replace(microsecond=0)
    deadline = args.deadline or now + timedelta(days=DEFAULT_DEADLINE_DAYS)
    task = TaskList(_tasks_path(data_dir, user)).add(
        args.name, deadline, args.priority, now
    )
    print(task.label())
    return 0


def _cmd_tasks_delete(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    if not TaskList(_tasks_path(data_dir, user)).delete_matching(args.text):
        print("未找到匹配的任务！", file=sys.stderr)
        return 1
    print("任务已删除")
    return 0


def _cmd_tasks_toggle(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    if not TaskList(_tasks_path(data_dir, user)).toggle_matching(args.text):
        print("未找到匹配的任务！", file=sys.stderr)
        return 1
    print("任务状态已切换")
    return 0


def _cmd_tasks_due(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    tasks = TaskList(_tasks_path(data_dir, user))
    for task, hours in tasks.due_soon(datetime.now()):
        print(f'任务 "{task.name}" 将在 {hours} 小时后到期！')
    return 0


# Messages ------------------------------------------------------------------


def _cmd_messages_list(args: argparse.Namespace, data_dir: Path) -> int:
    _login(args, data_dir)
    board = MessageBoard(data_dir / MESSAGES_FILE)
    keyword = (args.search or "").strip()
    found = board.search(keyword)
    for message in found:
        print(f"id: {message.id}")
        print(board.render(message))
    if keyword:
        print(f"找到 {len(found)} 条相关留言")
    return 0


def _cmd_messages_post(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    board = MessageBoard(data_dir / MESSAGES_FILE)
    message = board.post(user, args.text, args.reply_to, datetime.now())
    print("留言发布成功！")
    print(f"id: {message.id}")
    return 0


def _cmd_messages_delete(args: argparse.Namespace, data_dir: Path) -> int:
    user = _login(args, data_dir)
    MessageBoard(data_dir / MESSAGES_FILE).delete(args.id, user)
    print("留言已删除")
    return 0


def _cmd_messages_reply(args: argparse.Namespace, data_dir: Path) -> int:
    _login(args, data_dir)
    print(MessageBoard(data_dir / MESSAGES_FILE).reply_prefix(args.id))
    return 0


# Parser --------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    auth = argparse.ArgumentParser(add_help=False)
    auth.add_argument("--user", required=True, help="user name")
    auth.add_argument("--password", help="password (asked for when left out)")

    parser = argparse.ArgumentParser(prog="campuslife", description=APP_NAME)
    parser.add_argument(
        "--data-dir", default=".", help="directory holding the data files"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    def command(
        group: argparse._SubParsersAction,
        name: str,
        handler: Callable[[argparse.Namespace, Path], int],
        parents: list[argparse.ArgumentParser] | None = None,
        help_text: str | None = None,
    ) -> argparse.ArgumentParser:
        sub = group.add_parser(name, parents=parents or [], help=help_text)
        sub.set_defaults(handler=handler)
        return sub

    command(commands, "register", _cmd_register, [auth], "register a new user")
    command(commands, "login", _cmd_login, [auth], "check a user's credentials")
    command(commands, "about", _cmd_about, None, "show information about the program")

    courses = commands.add_parser("courses", parents=[auth], help="weekly timetable")
    course_cmds = courses.add_subparsers(dest="action", required=True)
    command(course_cmds, "list", _cmd_courses_list)
    add = command(course_cmds, "add", _cmd_courses_add)
    add.add_argument("name")
    add.add_argument("--teacher", default="")
    add.add_argument("--location", default="")
    add.add_argument("--day", type=_day, default=1)
    add.add_argument("--start", type=int, default=1)
    add.add_argument("--duration", type=int, default=2)
    remove = command(course_cmds, "remove", _cmd_courses_remove)
    remove.add_argument("--day", type=_day, required=True)
    remove.add_argument("--period", type=int, required=True)

    tasks = commands.add_parser("tasks", parents=[auth], help="task management")
    task_cmds = tasks.add_subparsers(dest="action", required=True)
    listing = command(task_cmds, "list", _cmd_tasks_list)
    listing.add_argument("--active", action="store_true", help="hide completed tasks")
    task_add = command(task_cmds, "add", _cmd_tasks_add)
    task_add.add_argument("name")
    task_add.add_argument("--deadline", type=_datetime)
    task_add.add_argument(
        "--priority",
        choices=[p.value for p in Priority],
        default=Priority.MEDIUM.value,
    )
    command(task_cmds, "delete", _cmd_tasks_delete).add_argument("text")
    command(task_cmds, "toggle", _cmd_tasks_toggle).add_argument("text")
    command(task_cmds, "due", _cmd_tasks_due)

    messages = commands.add_parser("messages", parents=[auth], help="message board")
    message_cmds = messages.add_subparsers(dest="action", required=True)
    command(message_cmds, "list", _cmd_messages_list).add_argument("--search")
    post = command(message_cmds, "post", _cmd_messages_post)
    post.add_argument("text")
    post.add_argument("--reply-to", help="id of the message answered")
    command(message_cmds, "delete", _cmd_messages_delete).add_argument("id")
    command(message_cmds, "reply", _cmd_messages_reply).add_argument("id")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = _build_parser().parse_args(argv)
    data_dir = Path(args.data_dir)
    try:
        return args.handler(args, data_dir)
    except (AccountError, SocialError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())