#!/usr/bin/env python3
"""
Database initialization script for the School Quiz API
Checks the Supabase connection and prints the schema to run in the SQL Editor
"""

import sys

from schoolquiz.config import settings
from schoolquiz.database import open_database

SCHEMA_SQL = """
create table if not exists users (
    id text primary key,              -- Supabase Auth user id
    username text not null,
    email text unique not null,
    role text not null default 'student' check (role in ('student', 'teacher')),
    created_at timestamptz not null default now()
);

create table if not exists quizzes (
    id text primary key,
    title text not null,
    description text,
    subject text not null,
    time_limit integer not null default 30,
    is_active boolean not null default true,
    created_by text not null references users(id),
    questions jsonb not null,
    created_at timestamptz not null default now()
);

-- results keep their quiz_id after the quiz is deleted
create table if not exists results (
    id text primary key,
    user_id text not null references users(id),
    quiz_id text not null,
    answers jsonb not null,
    score integer not null check (score between 0 and 100),
    time_spent integer not null default 0,
    created_at timestamptz not null default now()
);

create index if not exists results_quiz_id_idx on results (quiz_id);
create index if not exists results_user_id_idx on results (user_id);
create index if not exists quizzes_created_by_idx on quizzes (created_by);
"""

def init_supabase():
    """Test Supabase connection and print the schema"""
    try:
        print("Testing Supabase connection...")
        db = open_database(settings)
        try:
            connected = db.check_connection()
        finally:
            db.close()

        if connected:
            print("Supabase connection successful, all tables reachable.")
        else:
            print("Tables are missing or unreachable. Run the following SQL in the Supabase SQL Editor:")
            print(SCHEMA_SQL)
        return connected

    except Exception as e:
        print(f"Error testing Supabase: {e}")
        print("Check that SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are set in your .env file")
        return False

if __name__ == "__main__":
    sys.exit(0 if init_supabase() else 1)
