# TaskForge desktop front end.
# Requires: tkcalendar (pip install tkcalendar)

import logging
import time
import tkinter as tk
from datetime import date
from tkinter import font as tkfont

from tkcalendar import Calendar

from .calendar_utils import format_date, format_date_time, format_long_date, is_future, try_timestamp_to_date
from .config import get_settings
from .errors import ValidationError
from .models import MAX_PRIORITY, MIN_PRIORITY, ActionKind, SortMode, TaskAction, ViewTab
from .notifications import NotificationMonitor, is_approaching_deadline, time_remaining
from .operations import completion_summary
from .state import AppState
from .store import SaveQueue
from .theme import get_theme, priority_color, priority_label

logger = logging.getLogger(__name__)

TICK_MS = 1000
TAB_TITLES = {
    ViewTab.ALL: "All Tasks",
    ViewTab.TODAY: "Today's Tasks",
    ViewTab.UPCOMING: "Upcoming Tasks",
    ViewTab.COMPLETED: "Completed Tasks",
}
EMPTY_MESSAGES = {
    ViewTab.ALL: "No tasks yet",
    ViewTab.TODAY: "No tasks due today",
    ViewTab.UPCOMING: "No upcoming tasks",
    ViewTab.COMPLETED: "No completed tasks",
}
SORT_LABELS = (
    (SortMode.PRIORITY, "Priority"),
    (SortMode.DEADLINE, "Deadline"),
    (SortMode.ADDED, "Date Added"),
)


class TaskForgeApp(tk.Tk):
    def __init__(self, store, theme, notify_interval=30):
        super().__init__()
        self.title("TaskForge")
        self.geometry("1100x860")
        self.minsize(720, 560)
        self.theme = theme
        self.configure(bg=theme.bg)

        self.store = store
        self.save_queue = SaveQueue(store)
        self.app_state = AppState(tasks=store.load(), notifier=NotificationMonitor(notify_interval))
        self._priority_buttons = {}
        self._tab_buttons = {}
        self._sort_buttons = {}

        self._init_fonts()
        self._build_ui()
        self._bind_events()
        self._refresh_all()
        self._tick()

    def _init_fonts(self):
        preferred = ["Inter", "Segoe UI", "Helvetica", "Arial"]
        available = set(tkfont.families(self))
        family = next((f for f in preferred if f in available), "TkDefaultFont")

        self.font_title = tkfont.Font(family=family, size=18, weight="bold")
        self.font_header = tkfont.Font(family=family, size=14, weight="bold")
        self.font_text = tkfont.Font(family=family, size=12)
        self.font_small = tkfont.Font(family=family, size=10)
        self.font_italic = tkfont.Font(family=family, size=10, slant="italic")
        self.font_completed = tkfont.Font(family=family, size=12, overstrike=1)

    def _build_ui(self):
        t = self.theme
        self.grid_rowconfigure(1, weight=1)
        self.grid_columnconfigure(1, weight=1)

        # Title bar
        title_bar = tk.Frame(self, bg=t.bg, highlightthickness=1, highlightbackground=t.accent)
        title_bar.grid(row=0, column=0, columnspan=2, sticky="ew")
        title_bar.grid_columnconfigure(2, weight=1)
        tk.Label(title_bar, text="●", font=self.font_title, bg=t.bg, fg=t.primary).grid(
            row=0, column=0, padx=(12, 6), pady=8
        )
        tk.Label(title_bar, text="TaskForge", font=self.font_title, bg=t.bg, fg=t.text).grid(
            row=0, column=1, sticky="w"
        )
        self.bell_button = self._create_button(title_bar, "🔔", self._toggle_notifications, t.orange)
        self.bell_button.grid(row=0, column=4, padx=(6, 12))
        self.date_label = tk.Label(title_bar, text="", font=self.font_small, bg=t.bg, fg=t.muted)
        self.date_label.grid(row=0, column=3, sticky="e", padx=6)

        self.notify_frame = tk.Frame(title_bar, bg=t.panel)
        self.notify_frame.grid(row=1, column=0, columnspan=5, sticky="ew", padx=12, pady=(0, 8))

        # Left panel
        left = tk.Frame(self, bg=t.bg, width=300)
        left.grid(row=1, column=0, sticky="nsw", padx=16, pady=12)
        self._build_create_panel(left)
        self._build_tabs(left)
        self._build_calendar(left)
        self._create_button(left, "💾 Save All Tasks", self._save_all, t.muted).grid(
            row=9, column=0, sticky="ew", pady=(16, 0)
        )

        # Central task list
        center = tk.Frame(self, bg=t.bg)
        center.grid(row=1, column=1, sticky="nsew", padx=(0, 16), pady=12)
        center.grid_rowconfigure(1, weight=1)
        center.grid_columnconfigure(0, weight=1)

        header = tk.Frame(center, bg=t.bg)
        header.grid(row=0, column=0, columnspan=2, sticky="ew", pady=(0, 12))
        header.grid_columnconfigure(0, weight=1)
        self.list_title = tk.Label(header, text="", font=self.font_header, bg=t.bg, fg=t.text)
        self.list_title.grid(row=0, column=0, sticky="w")
        self.count_label = tk.Label(header, text="", font=self.font_small, bg=t.bg, fg=t.muted)
        self.count_label.grid(row=0, column=1, sticky="e")

        self.list_canvas = tk.Canvas(center, bg=t.bg, highlightthickness=0, bd=0)
        self.list_canvas.grid(row=1, column=0, sticky="nsew")
        list_scroll = tk.Scrollbar(center, command=self.list_canvas.yview)
        list_scroll.grid(row=1, column=1, sticky="ns")
        self.list_canvas.configure(yscrollcommand=list_scroll.set)
        self.list_body = tk.Frame(self.list_canvas, bg=t.bg)
        self._list_window = self.list_canvas.create_window((0, 0), window=self.list_body, anchor="nw")

        # Console strip
        self.log_text = tk.Text(
            center,
            height=4,
            bg=t.darker_bg,
            fg=t.muted,
            font=self.font_small,
            wrap="word",
            bd=0,
            highlightthickness=0,
        )
        self.log_text.tag_config("info", foreground=t.muted)
        self.log_text.tag_config("success", foreground=t.green)
        self.log_text.tag_config("error", foreground=t.red)
        self.log_text.grid(row=2, column=0, columnspan=2, sticky="ew", pady=(10, 0))
        self.log_text.configure(state="disabled")

        # Bottom bar
        bottom = tk.Frame(self, bg=t.bg, highlightthickness=1, highlightbackground=t.accent)
        bottom.grid(row=2, column=0, columnspan=2, sticky="ew")
        bottom.grid_columnconfigure(4, weight=1)
        tk.Label(bottom, text="Sort by:", font=self.font_small, bg=t.bg, fg=t.text).grid(
            row=0, column=0, padx=(12, 6), pady=8
        )
        for col, (mode, label) in enumerate(SORT_LABELS, start=1):
            btn = self._create_button(bottom, label, lambda m=mode: self._set_sort(m), t.cyan)
            btn.grid(row=0, column=col, padx=3)
            self._sort_buttons[mode] = btn
        self.calendar_toggle = self._create_button(bottom, "", self._toggle_calendar, t.primary)
        self.calendar_toggle.grid(row=0, column=5, padx=12, sticky="e")

    def _build_create_panel(self, parent):
        t = self.theme
        tk.Label(parent, text="✨ Create New Task", font=self.font_header, bg=t.bg, fg=t.text).grid(
            row=0, column=0, sticky="w", pady=(4, 12)
        )
        form = tk.Frame(parent, bg=t.bg)
        form.grid(row=1, column=0, sticky="ew")
        form.grid_columnconfigure(0, weight=1)

        tk.Label(form, text="Description:", font=self.font_text, bg=t.bg, fg=t.text).grid(
            row=0, column=0, sticky="w"
        )
        self.description_var = tk.StringVar()
        self.description_entry = tk.Entry(
            form,
            textvariable=self.description_var,
            font=self.font_text,
            bg=t.panel,
            fg=t.text,
            insertbackground=t.text,
            relief="flat",
            highlightthickness=1,
            highlightbackground=t.accent,
        )
        self.description_entry.grid(row=1, column=0, sticky="ew", pady=(4, 12))

        tk.Label(form, text="Priority:", font=self.font_text, bg=t.bg, fg=t.text).grid(
            row=2, column=0, sticky="w"
        )
        row = tk.Frame(form, bg=t.bg)
        row.grid(row=3, column=0, sticky="w", pady=4)
        for priority in range(MIN_PRIORITY, MAX_PRIORITY + 1):
            btn = self._create_button(
                row, str(priority), lambda p=priority: self._set_priority(p), priority_color(t, priority)
            )
            btn.grid(row=0, column=priority - 1, padx=2)
            self._priority_buttons[priority] = btn
        self.priority_label = tk.Label(form, text="", font=self.font_small, bg=t.bg, fg=t.muted)
        self.priority_label.grid(row=4, column=0, sticky="w", pady=(0, 12))

        tk.Label(form, text="Deadline:", font=self.font_text, bg=t.bg, fg=t.text).grid(
            row=5, column=0, sticky="w"
        )
        self.deadline_label = tk.Label(form, text="", font=self.font_small, bg=t.bg, fg=t.muted)
        self.deadline_label.grid(row=6, column=0, sticky="w", pady=4)
        self._create_button(form, "Clear deadline", self._clear_form_deadline, t.muted).grid(
            row=7, column=0, sticky="w"
        )
        self._create_button(form, "Add Task", self._add_task, t.primary).grid(
            row=8, column=0, sticky="ew", pady=(16, 0)
        )

    def _build_tabs(self, parent):
        t = self.theme
        tabs = tk.Frame(parent, bg=t.bg)
        tabs.grid(row=2, column=0, sticky="w", pady=(20, 12))
        for col, tab in enumerate(ViewTab):
            btn = self._create_button(tabs, tab.value.capitalize(), lambda v=tab: self._set_tab(v), t.cyan)
            btn.grid(row=0, column=col, padx=2)
            self._tab_buttons[tab] = btn

    def _build_calendar(self, parent):
        t = self.theme
        cal_frame = tk.Frame(parent, bg=t.bg)
        self.cal_frame = cal_frame
        cal_frame.grid(row=3, column=0, sticky="ew")
        tk.Label(cal_frame, text="📅 Calendar", font=self.font_text, bg=t.bg, fg=t.text).grid(
            row=0, column=0, sticky="w", pady=(0, 6)
        )
        self._create_button(cal_frame, "Today", self._calendar_today, t.orange).grid(
            row=0, column=1, sticky="e"
        )

        today = date.today()
        self.calendar = Calendar(
            cal_frame,
            selectmode="day",
            year=today.year,
            month=today.month,
            firstweekday="monday",
            showweeknumbers=False,
            font=self.font_small,
            background=t.bg,
            foreground=t.text,
            bordercolor=t.accent,
            headersbackground=t.bg,
            headersforeground=t.muted,
            selectbackground=t.primary,
            selectforeground=t.text,
            normalbackground=t.panel,
            normalforeground=t.text,
            weekendbackground=t.panel,
            weekendforeground=t.secondary,
            othermonthbackground=t.darker_bg,
            othermonthforeground=t.muted,
            othermonthwebackground=t.darker_bg,
            othermonthweforeground=t.muted,
        )
        self.calendar.selection_clear()
        self.calendar.grid(row=1, column=0, columnspan=2, sticky="ew")
        self.calendar.tag_config("task", background=t.accent, foreground=t.text)
        self.calendar.tag_config("today", foreground=t.orange)

    def _bind_events(self):
        self.description_entry.bind("<Return>", lambda _e: self._add_task())
        self.calendar.bind("<<CalendarSelected>>", self._on_calendar_selected)
        self.list_body.bind(
            "<Configure>",
            lambda _e: self.list_canvas.configure(scrollregion=self.list_canvas.bbox("all")),
        )
        self.list_canvas.bind(
            "<Configure>",
            lambda e: self.list_canvas.itemconfigure(self._list_window, width=e.width),
        )
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self.after(100, self.description_entry.focus_set)

    def _create_button(self, parent, text, command, accent):
        t = self.theme
        btn = tk.Button(
            parent,
            text=text,
            command=command,
            font=self.font_small,
            bg=t.bg,
            fg=accent,
            activebackground=self._blend(t.bg, accent, 0.35),
            activeforeground=t.text,
            relief="flat",
            bd=0,
            highlightthickness=1,
            highlightbackground=accent,
            cursor="hand2",
            padx=10,
            pady=4,
        )
        btn._accent = accent
        btn._selected = False
        btn.bind("<Enter>", lambda e: self._hover_button(btn, True))
        btn.bind("<Leave>", lambda e: self._hover_button(btn, False))
        return btn

    def _set_selected(self, btn, selected):
        btn._selected = selected
        if selected:
            btn.configure(bg=btn._accent, fg=self.theme.bg)
        else:
            btn.configure(bg=self.theme.bg, fg=btn._accent)

    def _hover_button(self, btn, entering):
        if btn._selected:
            return
        start = btn.cget("background")
        end = self._blend(self.theme.bg, btn._accent, 0.35) if entering else self.theme.bg
        self._animate_bg(btn, start, end, steps=6, delay=18)

    def _animate_bg(self, widget, start, end, steps=6, delay=18):
        colors = self._interpolate_colors(start, end, steps)

        def step(i=0):
            if i >= len(colors) or widget._selected or not widget.winfo_exists():
                return
            widget.configure(background=colors[i])
            widget.after(delay, step, i + 1)

        step()

    @staticmethod
    def _hex_to_rgb(value):
        value = value.lstrip("#")
        return tuple(int(value[i : i + 2], 16) for i in (0, 2, 4))

    @staticmethod
    def _rgb_to_hex(rgb):
        return "#{:02x}{:02x}{:02x}".format(*rgb)

    def _blend(self, a, b, t):
        ra, ga, ba = self._hex_to_rgb(a)
        rb, gb, bb = self._hex_to_rgb(b)
        r = int(ra + (rb - ra) * t)
        g = int(ga + (gb - ga) * t)
        b = int(ba + (bb - ba) * t)
        return self._rgb_to_hex((r, g, b))

    def _interpolate_colors(self, start, end, steps):
        if steps <= 1:
            return [end]
        return [self._blend(start, end, i / (steps - 1)) for i in range(steps)]

    def _log(self, message, tag="info"):
        self.log_text.configure(state="normal")
        self.log_text.insert("end", message + "\n", tag)
        self.log_text.configure(state="disabled")
        self.log_text.see("end")

    # Rendering

    def _refresh_all(self):
        self._update_controls()
        self._update_form()
        self._update_calendar_events()
        self._render_notifications()
        self._render_tasks()

    def _update_controls(self):
        view = self.app_state.view
        for tab, btn in self._tab_buttons.items():
            self._set_selected(btn, tab is view.current_tab)
        for mode, btn in self._sort_buttons.items():
            self._set_selected(btn, mode is view.sort_mode)
        self.bell_button.configure(text="🔔" if view.show_notifications else "🔕")
        self.calendar_toggle.configure(text="Hide Calendar" if view.show_calendar else "Show Calendar")
        if view.show_calendar:
            self.cal_frame.grid()
        else:
            self.cal_frame.grid_remove()
        self.date_label.configure(text=format_long_date(date.today()))

    def _update_form(self):
        view = self.app_state.view
        for priority, btn in self._priority_buttons.items():
            self._set_selected(btn, priority == view.new_priority)
        self.priority_label.configure(text=f"Selected: P{view.new_priority}")
        if view.new_deadline is None:
            self.deadline_label.configure(text="No deadline set", fg=self.theme.muted)
        else:
            self.deadline_label.configure(text=format_date(view.new_deadline), fg=self.theme.orange)

    def _update_calendar_events(self):
        for event_id in self.calendar.get_calevents():
            self.calendar.calevent_remove(event_id)
        due_dates = {}
        for task in self.app_state.tasks:
            day = try_timestamp_to_date(task.deadline) if task.deadline is not None else None
            if day is not None:
                due_dates[day] = due_dates.get(day, 0) + 1
        self.calendar.calevent_create(date.today(), "today", "today")
        for due_date, count in due_dates.items():
            label = f"{count} task" if count == 1 else f"{count} tasks"
            self.calendar.calevent_create(due_date, label, "task")

    def _render_notifications(self):
        t = self.theme
        for child in self.notify_frame.winfo_children():
            child.destroy()
        messages = self.app_state.notifications
        if not self.app_state.view.show_notifications or not messages:
            self.notify_frame.grid_remove()
            return
        self.notify_frame.grid()
        tk.Label(
            self.notify_frame, text="🔔 Notifications", font=self.font_text, bg=t.panel, fg=t.text
        ).pack(anchor="w", padx=10, pady=(8, 4))
        for message in messages:
            tk.Label(self.notify_frame, text=message, font=self.font_small, bg=t.panel, fg=t.orange).pack(
                anchor="w", padx=10
            )
        tk.Frame(self.notify_frame, bg=t.panel, height=6).pack()

    def _render_tasks(self):
        t = self.theme
        view = self.app_state.view
        now = int(time.time())
        for child in self.list_body.winfo_children():
            child.destroy()

        self.list_title.configure(text=TAB_TITLES[view.current_tab])
        done, total = completion_summary(self.app_state.tasks)
        self.count_label.configure(text=f"{done}/{total} completed")

        tasks = self.app_state.visible_tasks(now)
        if not tasks:
            tk.Label(
                self.list_body, text=EMPTY_MESSAGES[view.current_tab], font=self.font_header, bg=t.bg, fg=t.muted
            ).pack(pady=(40, 6))
            tk.Label(
                self.list_body, text="Add a task to get started!", font=self.font_small, bg=t.bg, fg=t.muted
            ).pack()
            return
        for i, task in enumerate(tasks):
            self._render_task_row(task, i % 2 == 0, now)

    def _render_task_row(self, task, zebra, now):
        t = self.theme
        is_overdue = task.deadline is not None and not is_future(task.deadline, now) and not task.completed
        is_approaching = task.deadline is not None and is_approaching_deadline(task.deadline, now)
        if task.completed:
            border, text_color = t.green, t.muted
        elif is_overdue:
            border, text_color = t.red, t.red
        elif is_approaching:
            border, text_color = t.orange, t.orange
        else:
            border, text_color = priority_color(t, task.priority), t.text
        base = self._blend(t.panel, t.text, 0.05) if zebra else t.panel

        row = tk.Frame(self.list_body, bg=base, highlightthickness=2, highlightbackground=border)
        row.pack(fill="x", padx=4, pady=4)
        row.grid_columnconfigure(1, weight=1)

        done_var = tk.BooleanVar(value=task.completed)
        row._done_var = done_var
        tk.Checkbutton(
            row,
            variable=done_var,
            command=lambda: self._dispatch(TaskAction(ActionKind.TOGGLE_COMPLETION, task.id)),
            bg=base,
            activebackground=base,
            selectcolor=t.bg,
            highlightthickness=0,
        ).grid(row=0, column=0, rowspan=3, padx=(8, 4), pady=8)

        tk.Label(
            row,
            text=task.description,
            font=self.font_completed if task.completed else self.font_text,
            bg=base,
            fg=text_color,
            anchor="w",
            justify="left",
            wraplength=420,
        ).grid(row=0, column=1, sticky="w", pady=(8, 0))

        if task.deadline is not None:
            deadline_color = t.muted if task.completed or not (is_overdue or is_approaching) else text_color
            tk.Label(
                row,
                text=f"Due: {format_date_time(task.deadline)}",
                font=self.font_small,
                bg=base,
                fg=deadline_color,
                anchor="w",
            ).grid(row=1, column=1, sticky="w")
            status_text, _ = time_remaining(task.deadline, now)
            tk.Label(row, text=status_text, font=self.font_italic, bg=base, fg=deadline_color, anchor="w").grid(
                row=2, column=1, sticky="w", pady=(0, 8)
            )

        actions = tk.Frame(row, bg=base)
        actions.grid(row=0, column=2, rowspan=3, sticky="e", padx=8, pady=8)
        self._create_button(
            actions, "🗑 Delete", lambda: self._dispatch(TaskAction(ActionKind.DELETE, task.id)), t.red
        ).grid(row=0, column=0, sticky="ew", pady=1)
        deadline_text = "📅 Clear Deadline" if task.deadline is not None else "➕ Set Deadline"
        self._create_button(actions, deadline_text, lambda: self._deadline_clicked(task), t.orange).grid(
            row=1, column=0, sticky="ew", pady=1
        )
        tk.Label(
            actions,
            text=f"Priority: {task.priority} ({priority_label(task.priority)})",
            font=self.font_small,
            bg=base,
            fg=priority_color(t, task.priority),
        ).grid(row=2, column=0, pady=(4, 0))

    # Actions

    def _request_save(self):
        self.save_queue.submit(self.app_state.tasks)

    def _dispatch(self, action):
        if self.app_state.apply(action):
            self._request_save()
            self.app_state.refresh_notifications(time.time())
        self._refresh_all()

    def _deadline_clicked(self, task):
        action = self.app_state.deadline_action(task)
        if action is None:
            self._log("Select a day on the calendar first.", "error")
            return
        self._dispatch(action)

    def _add_task(self):
        self.app_state.view.new_description = self.description_var.get()
        try:
            task = self.app_state.add_from_form()
        except ValidationError as exc:
            self._log(str(exc), "error")
            return
        self.description_var.set("")
        self.calendar.selection_clear()
        self._request_save()
        self.app_state.refresh_notifications(time.time())
        self._refresh_all()
        self._log(f"Task added: {task.description}", "success")

    def _save_all(self):
        self._request_save()
        self._log("Saving all tasks.", "info")

    def _set_priority(self, priority):
        self.app_state.view.new_priority = priority
        self._update_form()

    def _set_tab(self, tab):
        self.app_state.view.current_tab = tab
        self._refresh_all()

    def _set_sort(self, mode):
        self.app_state.set_sort_mode(mode)
        self._refresh_all()

    def _toggle_notifications(self):
        view = self.app_state.view
        view.show_notifications = not view.show_notifications
        if view.show_notifications:
            self.app_state.refresh_notifications(time.time())
        self._refresh_all()

    def _toggle_calendar(self):
        self.app_state.view.show_calendar = not self.app_state.view.show_calendar
        self._update_controls()

    def _clear_form_deadline(self):
        self.app_state.clear_form_deadline()
        self.calendar.selection_clear()
        self._update_form()

    def _calendar_today(self):
        today = date.today()
        self.calendar.selection_set(today)
        self.calendar.see(today)
        if self.app_state.view.selected_date != today:
            self.app_state.select_date(today)
        self._update_form()

    def _on_calendar_selected(self, _event=None):
        selected = self.calendar.selection_get()
        if selected is None:
            return
        self.app_state.select_date(selected)
        if self.app_state.view.selected_date is None:
            self.calendar.selection_clear()
        self._update_form()

    def _tick(self):
        last_check = self.app_state.notifier.last_checked
        self.app_state.refresh_notifications(time.time())
        if self.app_state.notifier.last_checked != last_check:
            self._render_notifications()
            self._render_tasks()
        for error in self.save_queue.drain_errors():
            self._log(str(error), "error")
        self.date_label.configure(text=format_long_date(date.today()))
        self.after(TICK_MS, self._tick)

    def _on_close(self):
        try:
            self.save_queue.close()
        finally:
            self.destroy()


def run_gui(store, settings=None):
    settings = settings or get_settings()
    logger.info("Launching GUI with %s", store.path)
    app = TaskForgeApp(store, get_theme(settings.theme), settings.notify_interval)
    app.mainloop()
