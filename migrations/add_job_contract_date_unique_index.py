"""
Add one-job-per-contract-per-day guarantee to the jobs table

Migration to add:
- scheduled_on (DATE) column, backfilled from scheduled_for
- unique index jobs_contract_date_uq on (contract_id, scheduled_on)

The job generator never creates two jobs for the same contract on the same
day within one run; this index rejects duplicates from concurrent runs.

Run with: python migrations/add_job_contract_date_unique_index.py
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import text
from app.database import engine


def upgrade():
    """Add scheduled_on column and unique index"""
    with engine.connect() as conn:
        # Check if column already exists to make migration idempotent
        result = conn.execute(text("""
            SELECT column_name
            FROM information_schema.columns
            WHERE table_name = 'jobs'
            AND column_name = 'scheduled_on'
        """))
        existing_columns = {row[0] for row in result}

        if 'scheduled_on' not in existing_columns:
            conn.execute(text("ALTER TABLE jobs ADD COLUMN scheduled_on DATE"))
            print("✅ Added scheduled_on column")
        else:
            print("ℹ️  scheduled_on column already exists")

        conn.execute(text("""
            UPDATE jobs
            SET scheduled_on = CAST(scheduled_for AS DATE)
            WHERE scheduled_on IS NULL AND scheduled_for IS NOT NULL
        """))
        print("✅ Backfilled scheduled_on from scheduled_for")

        # Existing duplicates would make the index creation fail
        duplicates = conn.execute(text("""
            SELECT contract_id, scheduled_on, COUNT(*)
            FROM jobs
            WHERE contract_id IS NOT NULL AND scheduled_on IS NOT NULL
            GROUP BY contract_id, scheduled_on
            HAVING COUNT(*) > 1
        """)).fetchall()
        if duplicates:
            for contract_id, scheduled_on, count in duplicates:
                print(f"❌ Contract {contract_id} has {count} jobs on {scheduled_on}")
            conn.rollback()
            print("\n❌ Resolve duplicate jobs before running this migration")
            sys.exit(1)

        conn.execute(text("""
            CREATE UNIQUE INDEX IF NOT EXISTS jobs_contract_date_uq
            ON jobs (contract_id, scheduled_on)
        """))
        print("✅ Created jobs_contract_date_uq index")

        conn.commit()
        print("\n✅ Migration completed successfully!")


def downgrade():
    """Remove unique index and scheduled_on column"""
    with engine.connect() as conn:
        conn.execute(text("DROP INDEX IF EXISTS jobs_contract_date_uq"))
        conn.execute(text("ALTER TABLE jobs DROP COLUMN IF EXISTS scheduled_on"))
        conn.commit()
        print("✅ Migration rolled back successfully!")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description='Manage jobs contract/date unique index migration')
    parser.add_argument('--down', action='store_true', help='Rollback the migration')
    args = parser.parse_args()

    if args.down:
        print("Rolling back migration...")
        downgrade()
    else:
        print("Running migration...")
        upgrade()
