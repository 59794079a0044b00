class QuizNotFoundError(LookupError):
    def __init__(self, quiz_id: str) -> None:
        super().__init__(f"Quiz {quiz_id} not found")
        self.quiz_id = quiz_id


class InvalidSubmissionError(ValueError):
    pass
