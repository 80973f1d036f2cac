#!/usr/bin/env python3
"""
Desktop shell for the lateness planner.

Pages: welcome, login, home (station/class/start time), email preview and
result. All decisions are delegated to LatenessPlanner.
"""

import logging
import tkinter as tk
from datetime import datetime
from tkinter import font as tkfont
from tkinter import messagebox, ttk

from .exceptions import LoginError, ValidationError
from .planner import LatenessPlanner

logger = logging.getLogger(__name__)

START_TIME_FORMAT = "%H:%M"
DEFAULT_START_TIME = "09:00"


def run_gui(planner: LatenessPlanner) -> None:
    """Build the window and run the Tk main loop."""
    root = tk.Tk()
    root.title("LateTrack — Will I Be Late?")
    root.geometry("640x520")

    title_font = tkfont.Font(family="Helvetica", size=20, weight="bold")
    body_font = tkfont.Font(family="Helvetica", size=12)

    container = tk.Frame(root)
    container.pack(fill="both", expand=True, padx=12, pady=12)
    container.grid_rowconfigure(0, weight=1)
    container.grid_columnconfigure(0, weight=1)

    pages = {}
    for name in ("welcome", "login", "home", "email", "result"):
        frame = tk.Frame(container)
        frame.grid(row=0, column=0, sticky="nsew")
        pages[name] = frame

    def show(name):
        pages[name].tkraise()

    # Welcome
    welcome = pages["welcome"]
    tk.Label(welcome, text="Will I Be Late?", font=title_font).pack(pady=(60, 10))
    tk.Label(welcome, text="Check your subway commute before class.", font=body_font).pack(pady=6)
    tk.Button(welcome, text="Log in", font=body_font, command=lambda: show("login")).pack(pady=20)

    # Login
    login = pages["login"]
    tk.Label(login, text="CUNY ID:", font=body_font).pack(anchor="w", pady=(40, 4))
    id_var = tk.StringVar()
    id_entry = tk.Entry(login, textvariable=id_var, font=body_font)
    id_entry.pack(fill="x")
    login_error = tk.Label(login, text="", fg="red", font=body_font)
    login_error.pack(anchor="w", pady=6)

    # Home
    home = pages["home"]
    greeting = tk.Label(home, text="", font=title_font)
    greeting.pack(anchor="w", pady=(0, 10))

    tk.Label(home, text="Station:", font=body_font).pack(anchor="w")
    station_var = tk.StringVar()
    station_entry = tk.Entry(home, textvariable=station_var, font=body_font)
    station_entry.pack(fill="x")
    suggestions = tk.Listbox(home, font=body_font, height=5)
    suggestions.pack(fill="x", pady=(2, 8))

    tk.Label(home, text="Class:", font=body_font).pack(anchor="w")
    class_combo = ttk.Combobox(home, state="readonly", font=body_font)
    class_combo.pack(fill="x", pady=(0, 8))

    row = tk.Frame(home)
    row.pack(fill="x", pady=(0, 8))
    tk.Label(row, text="Leaving at (HH:MM):", font=body_font).pack(side="left")
    start_var = tk.StringVar(value=DEFAULT_START_TIME)
    tk.Entry(row, textvariable=start_var, width=6, font=body_font).pack(side="left", padx=(4, 16))
    tk.Label(row, text="Delay penalty (min):", font=body_font).pack(side="left")
    penalty_var = tk.StringVar(value=str(planner.delay_penalty))
    tk.Spinbox(row, from_=0, to=120, textvariable=penalty_var, width=4, font=body_font).pack(side="left", padx=4)

    # Email preview
    email_page = pages["email"]
    tk.Label(email_page, text="Email preview", font=title_font).pack(anchor="w")
    email_text = tk.Text(email_page, font=body_font, height=14, wrap="word")
    email_text.pack(fill="both", expand=True, pady=8)

    # Result
    result_page = pages["result"]
    result_vars = {key: tk.StringVar() for key in ("station", "class", "service", "arrival", "status")}
    for label, key in (
        ("Station", "station"),
        ("Class", "class"),
        ("Service", "service"),
        ("Arrival", "arrival"),
    ):
        line = tk.Frame(result_page)
        line.pack(fill="x", pady=2)
        tk.Label(line, text=f"{label}:", width=10, anchor="w", font=body_font).pack(side="left")
        tk.Label(line, textvariable=result_vars[key], anchor="w", font=body_font).pack(side="left")
    tk.Label(result_page, textvariable=result_vars["status"], font=title_font).pack(anchor="w", pady=10)

    alternatives_box = tk.LabelFrame(result_page, text="Alternative routes", font=body_font)
    alternatives_list = tk.Listbox(alternatives_box, font=body_font, height=5)
    alternatives_list.pack(fill="both", expand=True, padx=6, pady=6)

    def refresh_suggestions(event=None):
        suggestions.delete(0, "end")
        for station in planner.station_suggestions(station_var.get()):
            suggestions.insert("end", station.name)

    def pick_suggestion(event=None):
        sel = suggestions.curselection()
        if sel:
            station_var.set(suggestions.get(sel[0]))

    station_entry.bind("<KeyRelease>", refresh_suggestions)
    suggestions.bind("<<ListboxSelect>>", pick_suggestion)

    def do_login(event=None):
        try:
            session = planner.login(id_var.get())
        except LoginError as e:
            login_error.config(text=str(e))
            return
        login_error.config(text="")
        greeting.config(text=f"Hi, {session.student.name}")
        options = planner.class_options()
        class_combo["values"] = options
        class_combo.set(options[0] if options else "")
        refresh_suggestions()
        show("home")

    def show_result():
        result = planner.session.result
        result_vars["station"].set(result.station)
        result_vars["class"].set(result.class_text)
        result_vars["service"].set(result.service_label)
        result_vars["arrival"].set(result.arrival_label)
        result_vars["status"].set(result.arrival_message)

        alternatives_list.delete(0, "end")
        for suggestion in result.alternatives:
            alternatives_list.insert("end", suggestion)
        if result.alternatives:
            alternatives_box.pack(fill="both", expand=True, pady=6)
        else:
            alternatives_box.pack_forget()
        show("result")

    def do_continue():
        try:
            start_time = datetime.strptime(start_var.get().strip(), START_TIME_FORMAT).time()
        except ValueError:
            messagebox.showwarning("Error", "Please enter a start time as HH:MM.")
            return
        try:
            planner.set_delay_penalty(int(penalty_var.get()))
        except ValueError:
            messagebox.showwarning("Error", "Delay penalty must be a whole number of minutes.")
            return

        try:
            result = planner.plan(station_var.get(), class_combo.get(), start_time)
        except ValidationError as e:
            logger.info(f"Planning rejected: {e}")
            messagebox.showwarning("Error", str(e))
            return

        if result.will_be_late:
            if messagebox.askyesno("Late Notice", result.confirmation_prompt):
                email_text.delete("1.0", "end")
                email_text.insert("1.0", planner.confirm_notification())
                show("email")
                return
            planner.decline_notification()
        show_result()

    def do_send():
        planner.update_draft(email_text.get("1.0", "end-1c"))
        planner.send_email()

    def do_logout():
        planner.logout()
        id_var.set("")
        show("login")

    id_entry.bind("<Return>", do_login)
    tk.Button(login, text="Log in", font=body_font, command=do_login).pack(pady=10)
    tk.Button(home, text="Continue", font=body_font, command=do_continue).pack(side="left", pady=8)
    tk.Button(home, text="Log out", font=body_font, command=do_logout).pack(side="right", pady=8)
    tk.Button(email_page, text="Send email", font=body_font, command=do_send).pack(side="left")
    tk.Button(email_page, text="Back to result", font=body_font, command=show_result).pack(side="right")
    tk.Button(result_page, text="Back to home", font=body_font, command=lambda: show("home")).pack(side="bottom", pady=8)

    show("welcome")

    if planner.roster_error:
        root.after(100, lambda: messagebox.showerror("Student Load Error", planner.roster_error))

    root.mainloop()


def main(data_dir: str = ".") -> None:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    planner = LatenessPlanner()
    planner.load_data(data_dir)
    run_gui(planner)


if __name__ == "__main__":
    main()
