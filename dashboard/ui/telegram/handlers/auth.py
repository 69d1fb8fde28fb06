from __future__ import annotations

import contextlib

from aiogram import Router, F
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message, ReplyKeyboardRemove

from dashboard.config import Settings
from dashboard.domain.auth.service import AuthResult, AuthService
from dashboard.ui.telegram.handlers._common import show_dashboard
from dashboard.ui.telegram.keyboards.common import auth_kb, cancel_kb
from dashboard.ui.telegram.keyboards.mainmenu import MM_SIGN_OUT
from dashboard.ui.telegram.notifier import format_notice
from dashboard.ui.telegram.states.auth import AuthFlow
from dashboard.ui.telegram.texts import auth as t

router = Router()


async def _forget_secret(message: Message) -> None:
    # passwords should not stay in the chat history
    with contextlib.suppress(TelegramBadRequest):
        await message.delete()


async def _finish(message: Message, state: FSMContext, result: AuthResult, settings: Settings) -> None:
    await message.answer(format_notice(result.notice))
    if not result.ok:
        # back to the start of the flow the user was in
        await message.answer(t.WELCOME, reply_markup=auth_kb())
        await state.clear()
        return

    await state.clear()
    if result.dashboard is not None:
        await show_dashboard(message, result.dashboard, settings)


# ---- sign in ----

@router.message(Command("signin"))
async def signin_cmd(message: Message, state: FSMContext):
    await state.set_state(AuthFlow.signin_email)
    await message.answer(t.ASK_SIGNIN_EMAIL, reply_markup=cancel_kb())


@router.callback_query(F.data == "auth:signin")
async def signin_cb(cb: CallbackQuery, state: FSMContext):
    await cb.answer()
    await state.set_state(AuthFlow.signin_email)
    await cb.message.answer(t.ASK_SIGNIN_EMAIL, reply_markup=cancel_kb())


@router.message(AuthFlow.signin_email)
async def signin_email(message: Message, state: FSMContext):
    await state.update_data(email=(message.text or "").strip())
    await state.set_state(AuthFlow.signin_password)
    await message.answer(t.ASK_SIGNIN_PASSWORD, reply_markup=cancel_kb())


@router.message(AuthFlow.signin_password)
async def signin_password(message: Message, state: FSMContext, auth_service: AuthService, settings: Settings):
    password = message.text or ""
    await _forget_secret(message)
    data = await state.get_data()

    await message.answer(t.SIGNING_IN)
    result = await auth_service.sign_in(message.chat.id, data.get("email", ""), password)
    await _finish(message, state, result, settings)


# ---- sign up ----

@router.message(Command("signup"))
async def signup_cmd(message: Message, state: FSMContext):
    await state.set_state(AuthFlow.signup_name)
    await message.answer(t.ASK_SIGNUP_NAME, reply_markup=cancel_kb())


@router.callback_query(F.data == "auth:signup")
async def signup_cb(cb: CallbackQuery, state: FSMContext):
    await cb.answer()
    await state.set_state(AuthFlow.signup_name)
    await cb.message.answer(t.ASK_SIGNUP_NAME, reply_markup=cancel_kb())


@router.message(AuthFlow.signup_name)
async def signup_name(message: Message, state: FSMContext):
    await state.update_data(display_name=(message.text or "").strip())
    await state.set_state(AuthFlow.signup_email)
    await message.answer(t.ASK_SIGNUP_EMAIL, reply_markup=cancel_kb())


@router.message(AuthFlow.signup_email)
async def signup_email(message: Message, state: FSMContext):
    await state.update_data(email=(message.text or "").strip())
    await state.set_state(AuthFlow.signup_password)
    await message.answer(t.ASK_SIGNUP_PASSWORD, reply_markup=cancel_kb())


@router.message(AuthFlow.signup_password)
async def signup_password(message: Message, state: FSMContext, auth_service: AuthService, settings: Settings):
    password = message.text or ""
    await _forget_secret(message)
    data = await state.get_data()

    await message.answer(t.CREATING_ACCOUNT)
    result = await auth_service.sign_up(
        message.chat.id,
        data.get("email", ""),
        password,
        data.get("display_name", ""),
    )
    await _finish(message, state, result, settings)


# ---- sign out ----

@router.message(Command("signout"))
@router.message(F.text == MM_SIGN_OUT)
async def signout_cmd(message: Message, state: FSMContext, auth_service: AuthService):
    await state.clear()
    notice = await auth_service.sign_out(message.chat.id)
    await message.answer(format_notice(notice), reply_markup=ReplyKeyboardRemove())
    await message.answer(t.WELCOME, reply_markup=auth_kb())
