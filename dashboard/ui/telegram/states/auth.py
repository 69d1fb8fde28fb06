from aiogram.fsm.state import StatesGroup, State


class AuthFlow(StatesGroup):
    # sign in
    signin_email = State()
    signin_password = State()

    # sign up
    signup_name = State()
    signup_email = State()
    signup_password = State()
