# Import every model so Base.metadata has all tables
from qwinhub.models.admin_db.admin_db import Admin
from qwinhub.models.draft_db.draft_db import Draft
from qwinhub.models.quiz_db.quiz_db import Quiz
from qwinhub.models.quiz_db.quiz_response_db import QuizResponse
from qwinhub.models.winner_db.winner_db import MonthlyWinner, Winner

__all__ = ["Admin", "Draft", "Quiz", "QuizResponse", "MonthlyWinner", "Winner"]
