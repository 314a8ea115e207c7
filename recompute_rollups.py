"""
Recompute every user's evaluation average score from stored evaluations
"""
from evalhub.database import SessionLocal
from evalhub.models.user import User
from evalhub.services.scoring import recompute_user_rollup

db = SessionLocal()
try:
    user_ids = [uid for (uid,) in db.query(User.id).order_by(User.id)]
    print("=" * 80)
    print(f"Recomputing evaluation averages for {len(user_ids)} users")
    print("=" * 80)

    for user_id in user_ids:
        rollup = recompute_user_rollup(db, user_id)
        print(f"User {user_id}: {rollup if rollup is not None else '-'}")
finally:
    db.close()
