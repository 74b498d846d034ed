"""Demo accounts, sessions and Kanban board loaded into an empty store."""

import logging
from datetime import timedelta

from backend.auth.passwords import hash_password
from backend.schemas.kanban import KanbanItem
from backend.schemas.session import Session
from backend.schemas.user import User
from backend.storage.storage import Storage
from backend.storage.store import EntityKind

logger = logging.getLogger(__name__)

DEMO_PASSWORD = 'password123'

DEMO_USERS = [
    {
        'id': 'mentor1',
        'email': 'ana@mentorconnect.com',
        'first_name': 'Ana',
        'last_name': 'Rodrigues',
        'user_type': 'mentor',
        'area': 'Tecnologia',
        'bio': 'Especialista em React, Vue.js e desenvolvimento frontend moderno. 5+ anos de experiência em startups.',
        'skills': ['React', 'JavaScript', 'CSS', 'TypeScript', 'Vue.js'],
        'hourly_rate': 80,
        'rating': 49,
        'review_count': 23,
        'avatar_url': 'https://images.unsplash.com/photo-1580489944761-15a19d654956?auto=format&fit=crop&w=150&h=150',
    },
    {
        'id': 'mentor2',
        'email': 'roberto@mentorconnect.com',
        'first_name': 'Roberto',
        'last_name': 'Silva',
        'user_type': 'mentor',
        'area': 'Negócios',
        'bio': 'Expert em estratégia de produto e growth. Ajudou 3 startups a escalar de 0 a 1M+ usuários.',
        'skills': ['Product Strategy', 'Growth', 'Analytics', 'Leadership'],
        'hourly_rate': 120,
        'rating': 48,
        'review_count': 31,
        'avatar_url': 'https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?auto=format&fit=crop&w=150&h=150',
    },
    {
        'id': 'mentor3',
        'email': 'marina@mentorconnect.com',
        'first_name': 'Marina',
        'last_name': 'Costa',
        'user_type': 'mentor',
        'area': 'Design',
        'bio': 'Designer experiente em UX/UI para produtos digitais. Especialista em pesquisa de usuário e design systems.',
        'skills': ['UX Design', 'Figma', 'Research', 'Prototyping', 'Design Systems'],
        'hourly_rate': 100,
        'rating': 50,
        'review_count': 18,
        'avatar_url': None,
    },
    {
        'id': 'student1',
        'email': 'joao@student.com',
        'first_name': 'João',
        'last_name': 'Silva',
        'user_type': 'student',
        'area': 'Tecnologia',
        'bio': 'Estudante de Ciência da Computação buscando mentoria em desenvolvimento frontend.',
        'skills': ['JavaScript', 'HTML', 'CSS'],
        'hourly_rate': 0,
        'rating': 0,
        'review_count': 0,
        'avatar_url': 'https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?auto=format&fit=crop&w=100&h=100',
    },
]

# (id, mentor, topic, description, hours from now, duration, status)
DEMO_SESSIONS = [
    ('session1', 'mentor1', 'React Performance', 'Revisar técnicas de otimização em React', 2, 60, 'confirmed'),
    ('session2', 'mentor2', 'Product Strategy', 'Discussão sobre estratégias de produto', 24, 90, 'pending'),
]

# (id, title, description, type, status, points, assignee, priority, progress)
DEMO_KANBAN_ITEMS = [
    ('kanban1', 'Sistema de autenticação completo', 'Como usuário, quero poder me cadastrar e fazer login',
     'epic', 'backlog', 8, 'João Silva', 'high', 0),
    ('kanban2', 'Listagem de mentores com filtros', 'Como estudante, quero filtrar mentores por área',
     'story', 'backlog', 5, 'Ana Santos', 'medium', 0),
    ('kanban3', 'Sistema de avaliações', 'Permitir avaliação de sessões de mentoria',
     'feature', 'backlog', 3, 'Carlos Lima', 'low', 0),
    ('kanban4', 'Formulário de cadastro de usuário', 'Criar formulário para estudantes se cadastrarem',
     'story', 'todo', 3, 'Maria Costa', 'high', 0),
    ('kanban5', 'Design do dashboard principal', 'Criar wireframes e protótipos',
     'task', 'todo', 2, 'Pedro Silva', 'medium', 0),
    ('kanban6', 'API de autenticação', 'Implementar login/logout com JWT',
     'story', 'in_progress', 5, 'João Silva', 'high', 70),
    ('kanban7', 'Sistema de agendamento', 'Permitir agendamento de sessões',
     'feature', 'in_progress', 8, 'Ana Santos', 'high', 40),
    ('kanban8', 'Configuração inicial do projeto', 'Setup React + Node.js + PostgreSQL',
     'setup', 'done', 1, 'João Silva', 'high', 100),
    ('kanban9', 'Protótipo de alta fidelidade', 'Design completo no Figma',
     'design', 'done', 3, 'Maria Costa', 'medium', 100),
    ('kanban10', 'Landing page', 'Página inicial com informações da plataforma',
     'story', 'done', 2, 'Pedro Silva', 'medium', 100),
]


def seed_demo_data(storage: Storage) -> bool:
    """Load the demo data set. Returns False if it was already present."""
    if storage.get_user('mentor1') is not None:
        return False

    now = storage.clock()
    password_hash = hash_password(DEMO_PASSWORD)

    for values in DEMO_USERS:
        storage.store.put(EntityKind.USER, User(password_hash=password_hash, created_at=now, **values))

    for session_id, mentor_id, topic, description, hours_ahead, duration, status in DEMO_SESSIONS:
        storage.store.put(
            EntityKind.SESSION,
            Session(
                id=session_id,
                student_id='student1',
                mentor_id=mentor_id,
                topic=topic,
                description=description,
                scheduled_at=now + timedelta(hours=hours_ahead),
                duration=duration,
                status=status,
                created_at=now,
            ),
        )

    for item_id, title, description, item_type, status, points, assignee, priority, progress in DEMO_KANBAN_ITEMS:
        storage.store.put(
            EntityKind.KANBAN_ITEM,
            KanbanItem(
                id=item_id,
                title=title,
                description=description,
                type=item_type,
                status=status,
                points=points,
                assignee=assignee,
                priority=priority,
                progress=progress,
                created_at=now,
            ),
        )

    logger.info(
        'Seeded %d users, %d sessions and %d kanban items',
        len(DEMO_USERS),
        len(DEMO_SESSIONS),
        len(DEMO_KANBAN_ITEMS),
    )
    return True
