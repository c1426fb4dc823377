class QuizError(Exception):
    pass


class NoQuestionsError(QuizError):
    pass


class InvalidAnswerError(QuizError):
    pass


class SessionStateError(QuizError):
    pass


class QuestionNotFoundError(QuizError):
    pass
