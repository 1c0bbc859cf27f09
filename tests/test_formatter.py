from datetime import datetime, timedelta

import pytest

from taskmgr.colors import DEFAULT_COLOR_SCHEME, ColorScheme, Color
from taskmgr.formatter import DisplayOptions, TaskFormatter, truncate_string
from taskmgr.tasks import Priority, Task


@pytest.fixture
def colors_on(monkeypatch):
    for key in ("NO_COLOR", "CI", "COLORTERM"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")


def test_new_task_formatter_keeps_options():
    opts = DisplayOptions(
        show_colors=True,
        show_icons=True,
        table_format=False,
        show_tags=True,
        show_due_date=True,
        show_priority=True,
    )
    formatter = TaskFormatter(opts)
    assert formatter.options.show_colors is True
    assert formatter.options.show_priority is True


def test_new_task_formatter_sets_default_scheme():
    formatter = TaskFormatter(DisplayOptions())
    assert formatter.options.color_scheme == DEFAULT_COLOR_SCHEME


def test_new_task_formatter_keeps_custom_scheme():
    scheme = ColorScheme(tags=Color.GRAY)
    formatter = TaskFormatter(DisplayOptions(color_scheme=scheme))
    assert formatter.options.color_scheme.tags == Color.GRAY


def test_format_task_list_and_table():
    task = Task(title="Test Task", done=False, priority=Priority.HIGH)
    formatter = TaskFormatter(DisplayOptions(show_priority=True))
    result = formatter.format_task(1, task)
    assert result == "[ ] 1: Test Task [HIG]"

    table = TaskFormatter(DisplayOptions(table_format=True)).format_task(1, task)
    assert "|" in table
    assert "Test Task" in table


def test_format_list_item():
    due = datetime.now() + timedelta(hours=24)
    task = Task(
        title="Test Task",
        description="Test Description",
        priority=Priority.MEDIUM,
        due_date=due,
        tags=["work", "urgent"],
    )
    opts = DisplayOptions(show_priority=True, show_tags=True, show_due_date=True)
    result = TaskFormatter(opts).format_list_item(1, task)
    assert "Test Task" in result
    assert "[MED]" in result
    assert "work, urgent" in result
    assert "Due:" in result
    assert result.startswith("[ ] 1: Test Task [MED] [work, urgent] (Due:")


def test_format_list_item_minimal():
    task = Task(title="Plain", priority=Priority.LOW, tags=["x"])
    result = TaskFormatter(DisplayOptions()).format_list_item(0, task)
    assert result == "[ ] 0: Plain"


def test_format_table_row():
    task = Task(title="Test Task", done=True, priority=Priority.CRITICAL)
    result = TaskFormatter(DisplayOptions()).format_table_row(1, task)
    parts = [part.strip() for part in result.split("|")]
    assert parts == ["1", "[x]", "[CRI]", "Test Task", "", "N/A"]
    assert result.startswith("1   | [x]    | [CRI]    | Test Task")


def test_format_table_row_truncates_title():
    task = Task(title="a" * 30, tags=["work"])
    result = TaskFormatter(DisplayOptions()).format_table_row(0, task)
    parts = [part.strip() for part in result.split("|")]
    assert parts[3] == "a" * 22 + "..."
    assert parts[4] == "[work]"


def test_format_table_header():
    header = TaskFormatter(DisplayOptions()).format_table_header()
    for column in ("ID", "Status", "Priority", "Title", "Tags", "Due Date"):
        assert column in header


def test_format_table_header_with_colors(colors_on):
    header = TaskFormatter(DisplayOptions(show_colors=True)).format_table_header()
    assert header.startswith("\033[1mID  | Status")
    assert header.endswith("Due Date\033[0m")


def test_format_table_separator():
    separator = TaskFormatter(DisplayOptions()).format_table_separator()
    assert "----" in separator
    assert "+" in separator


@pytest.mark.parametrize(
    "done, show_icons, expected",
    [
        (True, True, "✅"),
        (True, False, "[x]"),
        (False, True, "⭕"),
        (False, False, "[ ]"),
    ],
)
def test_status_icon(done, show_icons, expected):
    formatter = TaskFormatter(DisplayOptions(show_icons=show_icons))
    assert formatter.status_icon(Task(done=done)) == expected


def test_status_icon_overdue():
    yesterday = datetime.now() - timedelta(hours=24)
    formatter = TaskFormatter(DisplayOptions(show_icons=True))
    assert formatter.status_icon(Task(done=False, due_date=yesterday)) == "❌"


def test_status_icon_with_colors(colors_on):
    formatter = TaskFormatter(DisplayOptions(show_icons=True, show_colors=True))
    assert formatter.status_icon(Task(done=True)) == "\033[32m✅\033[0m"


@pytest.mark.parametrize(
    "tags, expected",
    [
        ([], ""),
        (["work"], "[work]"),
        (["work", "urgent", "bug"], "[work, urgent, bug]"),
    ],
)
def test_format_tags_without_colors(tags, expected):
    assert TaskFormatter(DisplayOptions()).format_tags(tags) == expected


@pytest.mark.parametrize("tags", [["personal"], ["work", "meeting"]])
def test_format_tags_with_colors_contains_tags(tags):
    formatter = TaskFormatter(DisplayOptions(show_colors=True, color_scheme=DEFAULT_COLOR_SCHEME))
    result = formatter.format_tags(tags)
    for tag in tags:
        assert tag in result
    assert result.startswith("[") and result.endswith("]")


def test_format_tags_with_colors_exact(colors_on):
    formatter = TaskFormatter(DisplayOptions(show_colors=True))
    assert formatter.format_tags(["work"]) == "[\033[36mwork\033[0m]"


@pytest.mark.parametrize("done", [False, True])
def test_format_title_without_colors(done):
    formatter = TaskFormatter(DisplayOptions())
    assert formatter.format_title(Task(title="Test", done=done)) == "Test"


def test_format_title_with_colors(colors_on):
    formatter = TaskFormatter(DisplayOptions(show_colors=True))
    assert formatter.format_title(Task(title="Test", done=True)) == "\033[32mTest\033[0m"
    overdue = Task(title="Late", due_date=datetime.now() - timedelta(days=1))
    assert formatter.format_title(overdue) == "\033[31mLate\033[0m"
    assert formatter.format_title(Task(title="Plain")) == "Plain"


@pytest.mark.parametrize(
    "priority, expected",
    [
        (Priority.CRITICAL, "[CRI]"),
        (Priority.HIGH, "[HIG]"),
        (Priority.MEDIUM, "[MED]"),
        (Priority.LOW, "[LOW]"),
    ],
)
def test_format_priority(priority, expected):
    assert TaskFormatter(DisplayOptions()).format_priority(priority) == expected


def test_format_priority_with_colors(colors_on):
    formatter = TaskFormatter(DisplayOptions(show_colors=True))
    assert formatter.format_priority(Priority.CRITICAL) == "\033[35m[🔴 CRI]\033[0m"
    assert formatter.format_priority(Priority.LOW) == "\033[32m[🟢 LOW]\033[0m"


@pytest.mark.parametrize(
    "description, expected",
    [("test desc", "[test desc]"), ("", "")],
)
def test_format_description(description, expected):
    assert TaskFormatter(DisplayOptions()).format_description(description) == expected


@pytest.mark.parametrize(
    "offset, done, contains",
    [
        (timedelta(hours=-24), False, "OVERDUE"),
        (timedelta(hours=2), False, "today"),
        (timedelta(hours=25), False, "tomorrow"),
        (timedelta(hours=72), False, "days"),
        (timedelta(hours=-25), True, "tomorrow"),
    ],
)
def test_format_due_date_contains(offset, done, contains):
    formatter = TaskFormatter(DisplayOptions())
    result = formatter.format_due_date(datetime.now() + offset, done)
    assert contains in result


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(hours=-1), "(OVERDUE: today)"),
        (timedelta(days=-3, hours=-1), "(OVERDUE: 3 days)"),
        (timedelta(hours=2), "(Due: today)"),
        (timedelta(hours=30), "(Due: tomorrow)"),
        (timedelta(days=3, hours=1), "(Due: 3 days)"),
    ],
)
def test_format_due_date_exact(offset, expected):
    formatter = TaskFormatter(DisplayOptions())
    assert formatter.format_due_date(datetime.now() + offset, False) == expected


def test_format_due_date_with_colors(colors_on):
    formatter = TaskFormatter(DisplayOptions(show_colors=True))
    result = formatter.format_due_date(datetime.now() + timedelta(hours=2), False)
    assert result == "\033[33m(Due: today)\033[0m"


@pytest.mark.parametrize(
    "text, max_len, expected",
    [
        ("short", 10, "short"),
        ("exactly10c", 10, "exactly10c"),
        ("this is a very long string", 10, "this is..."),
        ("test", 2, "te"),
    ],
)
def test_truncate_string(text, max_len, expected):
    assert truncate_string(text, max_len) == expected