"""Core - 설정, 로깅, 에러 정의"""
