"""
zksnark — zk-SNARK 산출물 파이프라인
====================================

회로의 제약 시스템(R1CS)으로부터 증명 키/검증 키를 만들고, 증명을 생성/검증하며,
온체인 검증 컨트랙트(Solidity)와 호출 인자를 만들어내는 명령 파이프라인.

지원 프로토콜: original (PGHR13), groth (Groth16), kimleeoh.
"""

__version__ = "0.1.0"
